import io
import json
from typing import Any

from gourmand.services.tools import TRANSMIT_RECIPE_TOOL

# 1x1 transparent PNG
STUB_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

STUB_RECIPE = "\n\n".join(
    [
        "Garlic Butter Pasta",
        "Ingredients:\n- 8 oz spaghetti\n- 3 tbsp butter\n- 3 cloves garlic\n- parmesan",
        "Instructions:\n1. Boil the pasta.\n2. Melt butter with sliced garlic.\n"
        "3. Toss the pasta in the butter and top with parmesan.",
        "Shopping list:\n- spaghetti\n- butter\n- garlic\n- parmesan",
    ]
)


class StubBedrockClient:
    """Offline stand-in for the ``bedrock-runtime`` and ``bedrock`` clients.

    Replies are scripted from the shape of the conversation so the shell can
    be exercised without credentials.
    """

    def __init__(self) -> None:
        self.converse_calls: list[dict[str, Any]] = []
        self.invoke_calls: list[dict[str, Any]] = []

    def converse(self, **kwargs: Any) -> dict[str, Any]:
        self.converse_calls.append(kwargs)
        messages = kwargs.get("messages") or []
        last_content = messages[-1]["content"] if messages else []

        tool_results = [block["toolResult"] for block in last_content if "toolResult" in block]
        if tool_results:
            saved = "\n".join(
                item["text"]
                for result in tool_results
                for item in result.get("content", [])
                if "text" in item
            )
            return self._reply([{"text": f"{STUB_RECIPE}\n\n{saved}"}], "end_turn")

        prompts = sum(
            1
            for message in messages
            if message["role"] == "user" and any("text" in block for block in message["content"])
        )
        if prompts <= 1:
            return self._reply(
                [
                    {
                        "text": "Hi, I'm Gourmand. Are you looking for a side dish, a main "
                        "course, or dessert? Any dietary preferences?"
                    }
                ],
                "end_turn",
            )
        if prompts == 2:
            return self._reply(
                [
                    {
                        "text": "Got it. Would you like Garlic Butter Pasta or "
                        "Lemon Chicken Skewers?"
                    }
                ],
                "end_turn",
            )
        return self._reply(
            [
                {
                    "toolUse": {
                        "toolUseId": f"stub-tool-{prompts}",
                        "name": TRANSMIT_RECIPE_TOOL,
                        "input": {
                            "recipe_details": STUB_RECIPE,
                            "image_prompt": "A bowl of garlic butter pasta, photorealistic",
                            "file_stem": "garlic_butter_pasta_1234",
                        },
                    }
                }
            ],
            "tool_use",
        )

    def invoke_model(self, **kwargs: Any) -> dict[str, Any]:
        self.invoke_calls.append(kwargs)
        request = json.loads(kwargs["body"])
        count = request.get("imageGenerationConfig", {}).get("numberOfImages", 1)
        body = json.dumps({"images": [STUB_IMAGE_BASE64] * count}).encode("utf-8")
        return {"body": io.BytesIO(body), "contentType": "application/json"}

    def list_foundation_models(self, **_: Any) -> dict[str, Any]:
        return {
            "modelSummaries": [
                {
                    "modelId": "anthropic.claude-3-5-sonnet-20241022-v2:0",
                    "providerName": "Anthropic",
                    "modelName": "Claude 3.5 Sonnet v2",
                    "inputModalities": ["TEXT", "IMAGE"],
                    "outputModalities": ["TEXT"],
                },
                {
                    "modelId": "amazon.nova-canvas-v1:0",
                    "providerName": "Amazon",
                    "modelName": "Nova Canvas",
                    "inputModalities": ["TEXT", "IMAGE"],
                    "outputModalities": ["IMAGE"],
                },
                {
                    "modelId": "amazon.nova-lite-v1:0",
                    "providerName": "Amazon",
                    "modelName": "Nova Lite",
                    "inputModalities": ["TEXT", "IMAGE", "VIDEO"],
                    "outputModalities": ["TEXT"],
                },
            ]
        }

    @staticmethod
    def _reply(content: list[dict[str, Any]], stop_reason: str) -> dict[str, Any]:
        return {
            "output": {"message": {"role": "assistant", "content": content}},
            "stopReason": stop_reason,
            "usage": {"inputTokens": 0, "outputTokens": 0, "totalTokens": 0},
        }
