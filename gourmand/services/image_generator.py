import json
import logging
from typing import Any

from gourmand.core.errors import BedrockRequestError, ImageGenerationError
from gourmand.services.bedrock_client import call_with_retry

logger = logging.getLogger(__name__)


class NovaCanvasImageGenerator:
    MAX_PROMPT_CHARS = 1024
    _WIDTH = 1024
    _HEIGHT = 1024
    _CFG_SCALE = 8.0
    _QUALITY = "standard"

    def __init__(self, client: Any, model_id: str, image_count: int = 1) -> None:
        self._client = client
        self._model_id = model_id
        self._image_count = image_count

    def build_request(self, prompt: str) -> dict[str, Any]:
        return {
            "taskType": "TEXT_IMAGE",
            "textToImageParams": {"text": prompt[: self.MAX_PROMPT_CHARS]},
            "imageGenerationConfig": {
                "numberOfImages": self._image_count,
                "width": self._WIDTH,
                "height": self._HEIGHT,
                "cfgScale": self._CFG_SCALE,
                "quality": self._QUALITY,
            },
        }

    def generate(self, prompt: str) -> list[str]:
        """Return base64-encoded PNG images for ``prompt``."""
        prompt = prompt.strip()
        if not prompt:
            raise ImageGenerationError("invalid_prompt", "image prompt is empty")
        if len(prompt) > self.MAX_PROMPT_CHARS:
            logger.warning(
                "image_prompt_truncated",
                extra={"prompt_chars": len(prompt), "max_chars": self.MAX_PROMPT_CHARS},
            )

        request = self.build_request(prompt)
        logger.debug("image_request %s", json.dumps(request))
        try:
            response = call_with_retry(
                "invoke_model",
                self._client.invoke_model,
                modelId=self._model_id,
                body=json.dumps(request),
                contentType="application/json",
                accept="application/json",
            )
        except BedrockRequestError as exc:
            raise ImageGenerationError(exc.error_class, "image generation request failed") from exc

        try:
            payload = json.loads(response["body"].read())
        except (KeyError, ValueError) as exc:
            raise ImageGenerationError(
                "invalid_model_output", "image response was not valid JSON"
            ) from exc

        if not isinstance(payload, dict):
            raise ImageGenerationError(
                "invalid_model_output", "image response was not a JSON object"
            )

        if payload.get("error"):
            raise ImageGenerationError("model_error", f"image model error: {payload['error']}")

        images = payload.get("images") or []
        if not images:
            raise ImageGenerationError("invalid_model_output", "image response had no images")

        logger.info(
            "image_generation",
            extra={"outcome": "success", "model_id": self._model_id, "image_count": len(images)},
        )
        return images
