import pytest

from gourmand.core.config import DEFAULT_MODEL_ID, Settings, get_settings


def test_get_settings_defaults_to_bedrock_backend() -> None:
    settings = get_settings()

    assert settings.backend == "bedrock"
    assert settings.model_id == DEFAULT_MODEL_ID
    assert settings.image_model_id == "amazon.nova-canvas-v1:0"
    assert settings.output_dir == "."
    assert settings.image_count == 1
    assert settings.verbose is False
    assert settings.aws_profile is None


def test_get_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("GOURMAND_BACKEND", "STUB")
    monkeypatch.setenv("GOURMAND_MODEL_ID", "us.amazon.nova-lite-v1:0")
    monkeypatch.setenv("GOURMAND_OUTPUT_DIR", "~/Desktop")
    monkeypatch.setenv("GOURMAND_IMAGE_COUNT", "3")
    monkeypatch.setenv("GOURMAND_VERBOSE", "yes")
    monkeypatch.setenv("GOURMAND_AWS_PROFILE", "bedrock")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.backend == "stub"
    assert settings.model_id == "us.amazon.nova-lite-v1:0"
    assert settings.output_dir == "~/Desktop"
    assert settings.image_count == 3
    assert settings.verbose is True
    assert settings.aws_profile == "bedrock"


def test_get_settings_fails_on_invalid_backend(monkeypatch) -> None:
    monkeypatch.setenv("GOURMAND_BACKEND", "sagemaker")
    get_settings.cache_clear()

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_get_settings_fails_on_out_of_range_image_count(monkeypatch) -> None:
    monkeypatch.setenv("GOURMAND_IMAGE_COUNT", "9")
    get_settings.cache_clear()

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_with_overrides_ignores_none_and_revalidates() -> None:
    settings = Settings().with_overrides(model_id="amazon.nova-lite-v1:0", aws_profile=None)

    assert settings.model_id == "amazon.nova-lite-v1:0"
    assert settings.aws_profile is None

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        settings.with_overrides(model_id="   ")
