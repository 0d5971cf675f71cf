"""Smart Prompt: image analysis (image-to-prompt).

The vision model describes an uploaded image as loosely typed JSON; this
module coerces that into ``ImageAnalysis`` and flattens it into the single
description string the image renderer consumes.
"""

from __future__ import annotations

import base64
import io
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from PIL import Image, UnidentifiedImageError

from .canonicalize import extract_json_object

SUPPORTED_IMAGE_FORMATS = [
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
]

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB

VISION_SYSTEM_PROMPT = """\
You are an expert AI image analyst and prompt engineer.
Analyze the image and provide detailed information in JSON format:

{
  "caption": "Brief description of the image (1-2 sentences)",
  "subjects": ["main subject 1", "main subject 2"],
  "style": "artistic style (e.g., photorealistic, anime, oil painting, etc.)",
  "lighting": "lighting condition (e.g., natural daylight, golden hour, studio lighting, etc.)",
  "composition": "composition type (e.g., rule of thirds, centered, wide shot, close-up, etc.)",
  "colors": ["dominant color 1", "dominant color 2"],
  "mood": "overall mood (e.g., peaceful, dramatic, energetic, etc.)",
  "technical": "technical details (camera, lens, render quality if applicable)"
}

Provide ONLY valid JSON, no other text."""

ANALYSIS_USER_PROMPT = "Analyze this image and provide detailed information in the specified JSON format."

CAPTION_PROMPT = (
    "Generate a detailed caption describing this image. "
    "Include subject, setting, lighting, style, and mood."
)


class ImageValidationError(ValueError):
    """Upload rejected before any model call."""


@dataclass
class ImageAnalysis:
    caption: str = ""
    subjects: list[str] = field(default_factory=list)
    style: str = ""
    lighting: str = ""
    composition: str = ""
    colors: list[str] = field(default_factory=list)
    mood: str = ""
    technical: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Any) -> "ImageAnalysis":
        if not isinstance(data, Mapping):
            return ImageAnalysis()
        return ImageAnalysis(
            caption=_as_text(data.get("caption")),
            subjects=_as_list(data.get("subjects")),
            style=_as_text(data.get("style")),
            lighting=_as_text(data.get("lighting")),
            composition=_as_text(data.get("composition")),
            colors=_as_list(data.get("colors")),
            mood=_as_text(data.get("mood")),
            technical=_as_text(data.get("technical")),
        )


@dataclass(frozen=True)
class ImageInfo:
    mime_type: str
    width: int
    height: int
    size: int


def parse_image_analysis(text: Any) -> ImageAnalysis:
    """Non-JSON vision output is an empty analysis, never an error."""
    return ImageAnalysis.from_dict(extract_json_object(text))


def reduce_image_analysis(analysis: ImageAnalysis) -> str:
    """Flatten an analysis into one description, falling back to the caption."""
    parts: list[str] = []
    if analysis.subjects:
        parts.append(", ".join(analysis.subjects))
    for value in (analysis.style, analysis.lighting, analysis.composition, analysis.mood):
        if value:
            parts.append(value)
    if analysis.colors:
        parts.append(", ".join(analysis.colors))
    return ", ".join(parts) or analysis.caption


def inspect_image(data: bytes) -> ImageInfo:
    """Validate an upload and report its format and size."""
    if not data:
        raise ImageValidationError("Image file is required")
    if len(data) > MAX_IMAGE_SIZE:
        raise ImageValidationError(f"Image too large. Max: {MAX_IMAGE_SIZE // 1024 // 1024}MB")
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime_type = Image.MIME.get(img.format or "", "")
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageValidationError(f"Unreadable image: {e}") from e
    if mime_type not in SUPPORTED_IMAGE_FORMATS:
        raise ImageValidationError(f"Unsupported format: {mime_type or 'unknown'}")
    return ImageInfo(mime_type=mime_type, width=width, height=height, size=len(data))


def to_data_url(data: bytes, mime_type: str = "image/jpeg") -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


# ── Private ───────────────────────────────────────────────────────

def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]
