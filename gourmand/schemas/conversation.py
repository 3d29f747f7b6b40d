from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StopReason(str, Enum):
    END_TURN = "end_turn"
    TOOL_USE = "tool_use"
    MAX_TOKENS = "max_tokens"
    STOP_SEQUENCE = "stop_sequence"
    GUARDRAIL_INTERVENED = "guardrail_intervened"
    CONTENT_FILTERED = "content_filtered"

    @classmethod
    def parse(cls, value: Any) -> "StopReason | str":
        try:
            return cls(value)
        except ValueError:
            return str(value)


class TransmitRecipeInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    recipe_details: str = Field(min_length=1)
    image_prompt: str = Field(min_length=1)
    file_stem: str = Field(min_length=1)

    @field_validator("recipe_details", "image_prompt", "file_stem", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return value.strip()


class RecipeArtifacts(BaseModel):
    base_path: str
    recipe_path: str
    image_paths: list[str] = Field(default_factory=list)
    image_error: str | None = None

    @property
    def files(self) -> list[str]:
        return [*self.image_paths, self.recipe_path]


class ConverseResult(BaseModel):
    stop_reason: StopReason | str
    message: dict[str, Any]
    usage: dict[str, Any] = Field(default_factory=dict)

    @property
    def content(self) -> list[dict[str, Any]]:
        return list(self.message.get("content") or [])


class ModelSummary(BaseModel):
    model_id: str
    provider: str = ""
    name: str = ""
    input_modalities: list[str] = Field(default_factory=list)
    output_modalities: list[str] = Field(default_factory=list)
