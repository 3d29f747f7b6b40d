import base64
import binascii
import logging
import re
from pathlib import Path

from gourmand.core.errors import ArtifactError
from gourmand.schemas.conversation import RecipeArtifacts

logger = logging.getLogger(__name__)

_UNSAFE_STEM_CHARS = re.compile(r"[^a-z0-9_]")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def sanitize_file_stem(stem: str) -> str:
    cleaned = _UNSAFE_STEM_CHARS.sub("_", stem.strip().lower())
    cleaned = _REPEATED_UNDERSCORES.sub("_", cleaned).strip("_")
    return cleaned or "recipe"


def write_recipe_artifacts(
    output_dir: str,
    file_stem: str,
    recipe_details: str,
    images: list[str],
    image_error: str | None = None,
) -> RecipeArtifacts:
    directory = Path(output_dir).expanduser()
    stem = sanitize_file_stem(file_stem)
    base = directory / stem

    decoded: list[bytes] = []
    for idx, image in enumerate(images):
        try:
            decoded.append(base64.b64decode(image, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise ArtifactError("invalid_image", f"image {idx} is not valid base64") from exc

    try:
        directory.mkdir(parents=True, exist_ok=True)
        image_paths = []
        for idx, data in enumerate(decoded):
            image_path = directory / f"{stem}-{idx}.png"
            image_path.write_bytes(data)
            image_paths.append(str(image_path))

        recipe_path = directory / f"{stem}.txt"
        recipe_path.write_text(recipe_details, encoding="utf-8")
    except OSError as exc:
        raise ArtifactError("write_failed", f"could not write recipe files to {directory}") from exc

    logger.info(
        "recipe_artifacts_written",
        extra={
            "outcome": "success",
            "file_stem": stem,
            "image_count": len(image_paths),
        },
    )
    return RecipeArtifacts(
        base_path=str(base),
        recipe_path=str(recipe_path),
        image_paths=image_paths,
        image_error=image_error,
    )
