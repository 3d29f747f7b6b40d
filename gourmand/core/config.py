import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_MODEL_ID = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"
DEFAULT_IMAGE_MODEL_ID = "amazon.nova-canvas-v1:0"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backend: Literal["bedrock", "stub"] = "bedrock"
    aws_profile: str | None = None
    aws_region: str | None = None
    model_id: str = DEFAULT_MODEL_ID
    image_model_id: str = DEFAULT_IMAGE_MODEL_ID
    image_count: int = Field(default=1, ge=1, le=5)
    output_dir: str = "."
    verbose: bool = False

    @field_validator("model_id", "image_model_id", "output_dir")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be empty")
        return cleaned

    def with_overrides(self, **overrides: Any) -> "Settings":
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return Settings.model_validate(values)
        except ValidationError as exc:
            raise RuntimeError(f"Invalid configuration: {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    raw: dict[str, Any] = {
        "backend": os.getenv("GOURMAND_BACKEND", "bedrock").strip().lower(),
        "aws_profile": os.getenv("GOURMAND_AWS_PROFILE") or None,
        "aws_region": os.getenv("GOURMAND_AWS_REGION") or None,
        "model_id": os.getenv("GOURMAND_MODEL_ID", DEFAULT_MODEL_ID),
        "image_model_id": os.getenv("GOURMAND_IMAGE_MODEL_ID", DEFAULT_IMAGE_MODEL_ID),
        "image_count": os.getenv("GOURMAND_IMAGE_COUNT", "1"),
        "output_dir": os.getenv("GOURMAND_OUTPUT_DIR", "."),
        "verbose": os.getenv("GOURMAND_VERBOSE", "0").strip().lower() in _TRUTHY,
    }
    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
