import pytest

from gourmand.core.errors import BedrockRequestError
from gourmand.services.bedrock_client import (
    bedrock_request_counters,
    call_with_retry,
    classify_error,
    list_foundation_models,
)
from gourmand.services.bedrock_stub import StubBedrockClient
from fakes import ClientError, EndpointConnectionError


class ReadTimeoutError(Exception):
    pass


@pytest.mark.parametrize(
    "exc,expected",
    (
        (ClientError("ThrottlingException", 429), ("rate_limit", True)),
        (ClientError("ServiceUnavailableException", 503), ("server_error", True)),
        (ClientError("ModelTimeoutException", 408), ("timeout", True)),
        (ClientError("AccessDeniedException", 403), ("access_denied", False)),
        (ClientError("ValidationException", 400), ("validation", False)),
        (ClientError("SomethingNew", 502), ("server_error", True)),
        (ClientError("SomethingNew", 400), ("api_error", False)),
        (EndpointConnectionError("down"), ("transport", True)),
        (ReadTimeoutError("slow"), ("timeout", True)),
        (ValueError("boom"), ("api_error", False)),
    ),
)
def test_classify_error(exc: Exception, expected: tuple[str, bool]) -> None:
    assert classify_error(exc) == expected


def test_call_with_retry_retries_retryable_errors_then_succeeds() -> None:
    outcomes = [ClientError("ThrottlingException", 429), {"ok": True}]
    calls = []

    def fn(**kwargs):
        calls.append(kwargs)
        item = outcomes.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    assert call_with_retry("converse", fn, modelId="m") == {"ok": True}
    assert calls == [{"modelId": "m"}, {"modelId": "m"}]


def test_call_with_retry_raises_when_retries_exhausted(caplog) -> None:
    attempts = []
    bedrock_request_counters["failure"] = 0

    def fn():
        attempts.append(1)
        raise EndpointConnectionError("down")

    with caplog.at_level("WARNING", logger="gourmand.services.bedrock_client"):
        with pytest.raises(BedrockRequestError, match="transport") as excinfo:
            call_with_retry("converse", fn)

    assert len(attempts) == 3
    assert excinfo.value.retry_count == 2
    assert excinfo.value.error_class == "transport"
    assert bedrock_request_counters["failure"] == 1
    record = [r for r in caplog.records if r.msg == "bedrock_request"][-1]
    assert record.outcome == "failure"
    assert record.operation == "converse"


def test_call_with_retry_does_not_retry_client_mistakes() -> None:
    attempts = []

    def fn():
        attempts.append(1)
        raise ClientError("ValidationException")

    with pytest.raises(BedrockRequestError) as excinfo:
        call_with_retry("converse", fn)

    assert len(attempts) == 1
    assert excinfo.value.error_class == "validation"


def test_list_foundation_models_sorted_by_provider_then_id() -> None:
    models = list_foundation_models(StubBedrockClient())

    assert [model.model_id for model in models] == [
        "amazon.nova-canvas-v1:0",
        "amazon.nova-lite-v1:0",
        "anthropic.claude-3-5-sonnet-20241022-v2:0",
    ]
    assert models[0].provider == "Amazon"
    assert models[0].output_modalities == ["IMAGE"]
