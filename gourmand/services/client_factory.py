from typing import Any

from gourmand.core.config import Settings, get_settings
from gourmand.services.bedrock_client import new_control_client, new_runtime_client
from gourmand.services.bedrock_stub import StubBedrockClient


def get_clients(settings: Settings | None = None) -> tuple[Any, Any]:
    """Return ``(runtime, control)`` clients for the configured backend."""
    config = settings or get_settings()

    if config.backend == "stub":
        stub = StubBedrockClient()
        return stub, stub

    return new_runtime_client(config), new_control_client(config)
