import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import click
from pydantic import ValidationError

from gourmand.core.errors import (
    ArtifactError,
    BedrockRequestError,
    ConversationError,
    ImageGenerationError,
)
from gourmand.schemas.conversation import ConverseResult, StopReason, TransmitRecipeInput
from gourmand.services.artifacts import write_recipe_artifacts
from gourmand.services.bedrock_client import call_with_retry
from gourmand.services.image_generator import NovaCanvasImageGenerator
from gourmand.services.system_prompts import INTRODUCTION_PROMPT
from gourmand.services.tools import TRANSMIT_RECIPE_TOOL

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

conversation_counters = {
    "turns": 0,
    "tool_uses": 0,
    "failure": 0,
}

_UNEXPECTED_BLOCKS = ("guardContent", "image", "video", "document", "toolResult")
_TRUNCATED_STOPS = (
    StopReason.MAX_TOKENS,
    StopReason.GUARDRAIL_INTERVENED,
    StopReason.CONTENT_FILTERED,
)


@dataclass
class ConversationState:
    model_id: str
    output_dir: str
    client: Any
    system_prompt: str
    tool_config: dict[str, Any]
    image_generator: NovaCanvasImageGenerator
    messages: list[dict[str, Any]] = field(default_factory=list)


def _dump(value: Any) -> str:
    return json.dumps(value, default=str)


def _stop_value(stop_reason: StopReason | str) -> str:
    return stop_reason.value if isinstance(stop_reason, StopReason) else stop_reason


def conversation_turn(state: ConversationState, content: list[dict[str, Any]]) -> ConverseResult:
    """Send one user message along with the whole history and record the reply."""
    state.messages.append({"role": "user", "content": content})
    logger.debug("converse_request model=%s content=%s", state.model_id, _dump(content))

    try:
        response = call_with_retry(
            "converse",
            state.client.converse,
            modelId=state.model_id,
            system=[{"text": state.system_prompt}],
            messages=state.messages,
            toolConfig=state.tool_config,
        )
    except BedrockRequestError as exc:
        # keep the history alternating user/assistant for the next attempt
        state.messages.pop()
        conversation_counters["failure"] += 1
        raise ConversationError(exc.error_class, str(exc)) from exc

    message = (response.get("output") or {}).get("message")
    if not isinstance(message, dict) or message.get("role") != "assistant":
        state.messages.pop()
        conversation_counters["failure"] += 1
        raise ConversationError("invalid_model_output", "Bedrock returned no assistant message")

    state.messages.append(message)
    conversation_counters["turns"] += 1
    result = ConverseResult(
        stop_reason=StopReason.parse(response.get("stopReason")),
        message=message,
        usage=response.get("usage") or {},
    )
    logger.debug(
        "converse_response stop_reason=%s message=%s",
        _stop_value(result.stop_reason),
        _dump(message),
    )
    return result


def _tool_result(tool_use_id: str, text: str, status: str = "success") -> dict[str, Any]:
    return {
        "toolResult": {
            "toolUseId": tool_use_id,
            "content": [{"text": text}],
            "status": status,
        }
    }


def process_tool_use(state: ConversationState, tool_use: dict[str, Any]) -> dict[str, Any]:
    tool_use_id = tool_use.get("toolUseId", "")
    name = tool_use.get("name")
    conversation_counters["tool_uses"] += 1

    if name != TRANSMIT_RECIPE_TOOL:
        logger.warning("tool_use", extra={"outcome": "failure", "error_class": "unknown_tool"})
        return _tool_result(tool_use_id, f"Unknown tool: {name}", status="error")

    try:
        args = TransmitRecipeInput.model_validate(tool_use.get("input") or {})
    except ValidationError as exc:
        logger.warning("tool_use", extra={"outcome": "failure", "error_class": "invalid_input"})
        missing = ", ".join(str(error["loc"][0]) for error in exc.errors() if error["loc"])
        return _tool_result(
            tool_use_id,
            f"Invalid input for {TRANSMIT_RECIPE_TOOL}; check these fields: {missing}",
            status="error",
        )

    images: list[str] = []
    image_error = None
    try:
        images = state.image_generator.generate(args.image_prompt)
    except ImageGenerationError as exc:
        image_error = exc.error_class
        logger.warning(
            "tool_use_image",
            extra={"outcome": "failure", "error_class": exc.error_class},
        )

    try:
        artifacts = write_recipe_artifacts(
            state.output_dir,
            args.file_stem,
            args.recipe_details,
            images,
            image_error=image_error,
        )
    except ArtifactError as exc:
        logger.warning("tool_use", extra={"outcome": "failure", "error_class": exc.error_class})
        return _tool_result(tool_use_id, f"Could not save the recipe: {exc}", status="error")

    lines = [f"written output to {artifacts.base_path}"]
    lines.extend(f"- {path}" for path in artifacts.files)
    if artifacts.image_error:
        lines.append("The photo of the dish could not be generated.")
    return _tool_result(tool_use_id, "\n".join(lines))


def say(state: ConversationState, prompt: str, emit: Emit = click.echo) -> ConverseResult:
    """Run one user turn, answering tool requests until the model yields.

    On failure the history is cut back to where it was before ``prompt`` so a
    dangling toolUse never reaches the next request.
    """
    checkpoint = len(state.messages)
    try:
        return _run_turn(state, prompt, emit)
    except BaseException:
        del state.messages[checkpoint:]
        raise


def _run_turn(state: ConversationState, prompt: str, emit: Emit) -> ConverseResult:
    result = conversation_turn(state, [{"text": prompt}])

    while True:
        tool_results = []
        for block in result.content:
            if "text" in block:
                emit(block["text"])
            elif "toolUse" in block:
                tool_results.append(process_tool_use(state, block["toolUse"]))
            else:
                kind = next((key for key in _UNEXPECTED_BLOCKS if key in block), "unknown")
                logger.warning("unexpected_content_block", extra={"block_type": kind})

        if tool_results:
            # every result for this assistant message goes back in a single user message
            result = conversation_turn(state, tool_results)
            continue
        if result.stop_reason == StopReason.TOOL_USE:
            raise ConversationError(
                "invalid_model_output", "model requested a tool without a toolUse block"
            )

        stop_reason = _stop_value(result.stop_reason)
        if result.stop_reason in _TRUNCATED_STOPS:
            logger.warning("conversation_turn_cut_short", extra={"stop_reason": stop_reason})
        elif result.stop_reason not in (StopReason.END_TURN, StopReason.STOP_SEQUENCE):
            logger.warning("unknown_stop_reason", extra={"stop_reason": stop_reason})
        return result


def introduce(state: ConversationState, emit: Emit = click.echo) -> ConverseResult:
    return say(state, INTRODUCTION_PROMPT, emit)
