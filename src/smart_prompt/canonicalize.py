"""Smart Prompt: defaulting and validation of AI-extracted parameters.

The text-completion call returns a loosely shaped object (snake_case keys,
enum-ish strings of unknown validity, missing branches). ``canonicalize``
turns anything it is given into a fully populated ``PromptParams``; it never
raises and never leaves a field empty.
"""

from __future__ import annotations

import json
import logging
import math
import re
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from .models import (
    AspectRatio,
    CameraAngle,
    CameraConfig,
    CameraMovement,
    LightingType,
    PromptParams,
    ShotType,
    StyleConfig,
    VisualStyle,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# ─── System Prompt ────────────────────────────────────────────────
SYSTEM_PROMPT = """\
You are a professional AI video prompt parsing expert.
Parse the user's natural language description into structured parameters.

Output JSON format:
{
  "subject": "main subject",
  "action": "action description",
  "scene": "scene environment",
  "camera": {
    "shot_type": "medium_shot",
    "movement": "static",
    "angle": "eye_level",
    "lens": "35mm"
  },
  "style": {
    "visual": "cinematic",
    "lighting": "natural",
    "color": "natural colors",
    "quality": "4K cinematic"
  },
  "audio": "",
  "duration": 10,
  "aspect_ratio": "16:9"
}

Allowed values:
- shot_type: extreme_close_up, close_up, medium_shot, long_shot, extreme_long_shot, wide_shot
- movement: static, pan, tilt, dolly_in, dolly_out, truck, pedestal, handheld, gimbal, drone
- angle: eye_level, low_angle, high_angle, dutch_angle, overhead, birds_eye
- visual: cinematic, documentary, commercial, music_video, anime, minimalist, vintage, noir, cyberpunk
- lighting: natural, golden_hour, blue_hour, soft, hard, neon, studio, dramatic, low_key, high_key
- aspect_ratio: 16:9, 9:16, 4:3, 3:4, 1:1, 21:9

Rules:
1. Intelligently fill reasonable details
2. Extract cinematography terms
3. Output valid JSON only"""

# ─── Defaults ─────────────────────────────────────────────────────
DEFAULT_SUBJECT = "a person"
DEFAULT_ACTION = "standing in a scene"
DEFAULT_SCENE = "modern indoor environment"
DEFAULT_SHOT_TYPE = ShotType.MEDIUM_SHOT
DEFAULT_MOVEMENT = CameraMovement.STATIC
DEFAULT_ANGLE = CameraAngle.EYE_LEVEL
DEFAULT_LENS = "35mm"
DEFAULT_VISUAL = VisualStyle.CINEMATIC
DEFAULT_LIGHTING = LightingType.NATURAL
DEFAULT_COLOR_GRADE = "natural colors"
DEFAULT_QUALITY = "4K cinematic"
DEFAULT_AUDIO = ""
DEFAULT_DURATION = 10
DEFAULT_ASPECT_RATIO = AspectRatio.WIDESCREEN


def default_params() -> PromptParams:
    """The canonical set used when the upstream call produced nothing usable."""
    return canonicalize(None)


def canonicalize(raw: Any) -> PromptParams:
    """Fill every missing or invalid field of ``raw`` with its default.

    ``raw`` may be ``None``, a non-mapping (treated as empty), a mapping in
    the LLM's snake_case shape, the camelCase shape of ``PromptParams.to_dict``
    or a ``PromptParams`` itself, so the function is idempotent.
    """
    if isinstance(raw, PromptParams):
        raw = raw.to_dict()
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    camera = _section(data, "camera")
    style = _section(data, "style")

    return PromptParams(
        subject=_text(data.get("subject"), DEFAULT_SUBJECT),
        action=_text(data.get("action"), DEFAULT_ACTION),
        scene=_text(data.get("scene"), DEFAULT_SCENE),
        camera=CameraConfig(
            shot_type=_member(ShotType, _pick(camera, "shot_type", "shotType"), DEFAULT_SHOT_TYPE),
            movement=_member(CameraMovement, camera.get("movement"), DEFAULT_MOVEMENT),
            angle=_member(CameraAngle, camera.get("angle"), DEFAULT_ANGLE),
            lens=_text(camera.get("lens"), DEFAULT_LENS),
        ),
        style=StyleConfig(
            visual=_member(VisualStyle, style.get("visual"), DEFAULT_VISUAL),
            lighting=_member(LightingType, style.get("lighting"), DEFAULT_LIGHTING),
            color_grade=_text(
                _pick(style, "color", "colorGrade", "color_grade"), DEFAULT_COLOR_GRADE
            ),
            quality=_text(style.get("quality"), DEFAULT_QUALITY),
            film_stock=_optional_text(_pick(style, "film_stock", "filmStock")),
        ),
        audio=_text(data.get("audio"), DEFAULT_AUDIO),
        duration=_duration(data.get("duration")),
        aspect_ratio=_member(
            AspectRatio, _pick(data, "aspect_ratio", "aspectRatio"), DEFAULT_ASPECT_RATIO
        ),
        negative_prompt=_optional_text(_pick(data, "negative_prompt", "negativePrompt")),
    )


def extract_json_object(text: Any) -> Optional[dict[str, Any]]:
    """Extract one JSON object from LLM output, or None when there is none."""
    if not isinstance(text, str) or not text.strip():
        return None
    cleaned = text.strip()

    # Strategy 1: Direct parse
    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except (ValueError, RecursionError):
        pass

    # Strategy 2: Markdown fences
    for block in re.findall(r"```(?:json)?\s*\n?(.*?)\n?\s*```", cleaned, re.DOTALL):
        try:
            parsed = json.loads(block.strip())
        except (ValueError, RecursionError):
            continue
        if isinstance(parsed, dict):
            return parsed

    # Strategy 3: Outermost {...} span
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if 0 <= start < end:
        try:
            parsed = json.loads(cleaned[start : end + 1])
        except (ValueError, RecursionError):
            return None
        if isinstance(parsed, dict):
            return parsed
    return None


# ── Private ───────────────────────────────────────────────────────

def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any, default: str) -> str:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            return default
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _member(enum_cls: Type[E], value: Any, default: E) -> E:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        return default
    token = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return enum_cls(token)
    except ValueError:
        logger.debug("Replacing unknown %s %r with %s", enum_cls.__name__, value, default.value)
        return default


def _duration(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return DEFAULT_DURATION
    try:
        seconds = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return DEFAULT_DURATION
    if math.isfinite(seconds) and seconds > 0:
        return value if isinstance(value, (int, float)) else seconds
    return DEFAULT_DURATION
