import logging
import time
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config

from gourmand.core.config import Settings
from gourmand.core.errors import BedrockRequestError
from gourmand.schemas.conversation import ModelSummary

logger = logging.getLogger(__name__)

MAX_API_RETRIES = 2
BACKOFF_BASE_SECONDS = 0.5
READ_TIMEOUT_SECONDS = 300

bedrock_request_counters = {
    "success": 0,
    "retry": 0,
    "failure": 0,
}

_ERROR_CODES: dict[str, tuple[str, bool]] = {
    "ThrottlingException": ("rate_limit", True),
    "ServiceUnavailableException": ("server_error", True),
    "InternalServerException": ("server_error", True),
    "ModelTimeoutException": ("timeout", True),
    "ModelNotReadyException": ("model_not_ready", True),
    "AccessDeniedException": ("access_denied", False),
    "ValidationException": ("validation", False),
    "ResourceNotFoundException": ("not_found", False),
}

_TRANSPORT_ERRORS: dict[str, tuple[str, bool]] = {
    "EndpointConnectionError": ("transport", True),
    "ConnectionClosedError": ("transport", True),
    "ReadTimeoutError": ("timeout", True),
    "ConnectTimeoutError": ("timeout", True),
}


def _session(settings: Settings) -> boto3.Session:
    # Session() walks the usual chain: explicit profile, env vars, default profile.
    return boto3.Session(profile_name=settings.aws_profile, region_name=settings.aws_region)


def _client_config() -> Config:
    return Config(
        read_timeout=READ_TIMEOUT_SECONDS,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )


def new_runtime_client(settings: Settings) -> Any:
    return _session(settings).client("bedrock-runtime", config=_client_config())


def new_control_client(settings: Settings) -> Any:
    return _session(settings).client("bedrock", config=_client_config())


def classify_error(exc: Exception) -> tuple[str, bool]:
    response = getattr(exc, "response", None)
    if isinstance(response, dict):
        code = (response.get("Error") or {}).get("Code")
        if code in _ERROR_CODES:
            return _ERROR_CODES[code]
        status_code = (response.get("ResponseMetadata") or {}).get("HTTPStatusCode")
        if isinstance(status_code, int):
            if status_code == 429:
                return "rate_limit", True
            if status_code >= 500:
                return "server_error", True

    error_name = exc.__class__.__name__
    if error_name in _TRANSPORT_ERRORS:
        return _TRANSPORT_ERRORS[error_name]

    return "api_error", False


def call_with_retry(operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
    for attempt in range(MAX_API_RETRIES + 1):
        try:
            result = fn(**kwargs)
        except Exception as exc:
            error_class, retryable = classify_error(exc)
            if not retryable or attempt == MAX_API_RETRIES:
                bedrock_request_counters["failure"] += 1
                logger.warning(
                    "bedrock_request",
                    extra={
                        "operation": operation,
                        "outcome": "failure",
                        "retry_count": attempt,
                        "error_class": error_class,
                    },
                )
                raise BedrockRequestError(
                    error_class,
                    f"Bedrock {operation} request failed ({error_class})",
                    retry_count=attempt,
                ) from exc
            bedrock_request_counters["retry"] += 1
            logger.debug(
                "bedrock_request",
                extra={
                    "operation": operation,
                    "outcome": "retry",
                    "retry_count": attempt,
                    "error_class": error_class,
                },
            )
            time.sleep(BACKOFF_BASE_SECONDS * (2**attempt))
            continue

        bedrock_request_counters["success"] += 1
        return result

    raise BedrockRequestError("api_error", f"Bedrock {operation} request failed")


def list_foundation_models(control_client: Any) -> list[ModelSummary]:
    response = call_with_retry("list_foundation_models", control_client.list_foundation_models)
    models = [
        ModelSummary(
            model_id=item.get("modelId", ""),
            provider=item.get("providerName", ""),
            name=item.get("modelName", ""),
            input_modalities=list(item.get("inputModalities") or []),
            output_modalities=list(item.get("outputModalities") or []),
        )
        for item in response.get("modelSummaries") or []
    ]
    return sorted(models, key=lambda model: (model.provider.lower(), model.model_id))
