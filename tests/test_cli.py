import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from gourmand.cli.main import main


@pytest.fixture(autouse=True)
def _drop_stderr_handler():
    yield
    # the handler points at the runner's stream, which is closed after invoke
    logger = logging.getLogger("gourmand")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_list_prints_models_from_stub_backend() -> None:
    result = CliRunner().invoke(main, ["--backend", "stub", "--list"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "amazon.nova-canvas-v1:0  Amazon  Nova Canvas"
    assert len(lines) == 3


def test_stub_session_walks_through_to_saved_recipe(tmp_path: Path) -> None:
    script = "say a vegetarian main course\nsay the pasta\nquit\n"

    result = CliRunner().invoke(
        main, ["--backend", "stub", "-o", str(tmp_path), "-m", "stub-model"], input=script
    )

    assert result.exit_code == 0, result.output
    assert "Hi, I'm Gourmand." in result.output
    assert "Garlic Butter Pasta or Lemon Chicken Skewers" in result.output
    assert "written output to" in result.output
    assert (tmp_path / "garlic_butter_pasta_1234.txt").exists()
    assert (tmp_path / "garlic_butter_pasta_1234-0.png").exists()


def test_invalid_configuration_exits_with_error(monkeypatch) -> None:
    monkeypatch.setenv("GOURMAND_IMAGE_COUNT", "0")

    result = CliRunner().invoke(main, ["--backend", "stub", "--list"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_ctrl_c_in_shell_exits_cleanly(monkeypatch, tmp_path: Path) -> None:
    def interrupt(self):
        raise KeyboardInterrupt

    monkeypatch.setattr("gourmand.cli.main.RecipeShell.cmdloop", interrupt)

    result = CliRunner().invoke(main, ["--backend", "stub", "-o", str(tmp_path)])

    assert result.exit_code == 0
    assert "Traceback" not in result.output
    assert "Hi, I'm Gourmand." in result.output
