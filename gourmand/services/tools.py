from dataclasses import dataclass
from typing import Any

TRANSMIT_RECIPE_TOOL = "transmit_recipe"


@dataclass(frozen=True)
class ToolArg:
    name: str
    description: str
    arg_type: str = "string"
    required: bool = True


def make_tool_config(name: str, description: str, args: list[ToolArg]) -> dict[str, Any]:
    """Build a Converse ``toolConfig`` holding a single tool."""
    properties = {
        arg.name: {"type": arg.arg_type, "description": arg.description} for arg in args
    }
    required = [arg.name for arg in args if arg.required]
    return {
        "tools": [
            {
                "toolSpec": {
                    "name": name,
                    "description": description,
                    "inputSchema": {
                        "json": {
                            "type": "object",
                            "properties": properties,
                            "required": required,
                        }
                    },
                }
            }
        ]
    }


def transmit_recipe_tool() -> dict[str, Any]:
    description = (
        "This tool transmits a recipe (ingredients, instructions, and shopping list), a prompt "
        "for an image generation model to produce an appetizing photo of the recipe, as well as "
        "a file stem for saving the actual data. It will return the actual location so that you "
        "can respond to the user."
    )
    args = [
        ToolArg(
            "recipe_details",
            "The actual recipe, including ingredients, instructions, and shopping list",
        ),
        ToolArg(
            "image_prompt",
            "A prompt suitable for an image generation model to produce an appetizing photo "
            "of the final dish",
        ),
        ToolArg(
            "file_stem",
            "A file stem for this recipe, all lowercase, with words separated by underscores, "
            "with a 4 digit random number appended to the end, such as banana_bread_1234",
        ),
    ]
    return make_tool_config(TRANSMIT_RECIPE_TOOL, description, args)
