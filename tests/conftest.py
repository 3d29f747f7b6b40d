import sys
from pathlib import Path

import pytest

# Ensure project root is importable when pytest is invoked from non-root directories.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from gourmand.core.config import get_settings

    # Keep tests deterministic regardless of caller shell environment.
    for name in (
        "GOURMAND_BACKEND",
        "GOURMAND_AWS_PROFILE",
        "GOURMAND_AWS_REGION",
        "GOURMAND_MODEL_ID",
        "GOURMAND_IMAGE_MODEL_ID",
        "GOURMAND_IMAGE_COUNT",
        "GOURMAND_OUTPUT_DIR",
        "GOURMAND_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _no_backoff(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("gourmand.services.bedrock_client.time.sleep", lambda _: None)
