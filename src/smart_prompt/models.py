"""Smart Prompt: canonical parameter model.

Every request, whatever its source (free text, a social-video link or an
uploaded image), is reduced to these records before rendering.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


# ─── Vocabularies ─────────────────────────────────────────────────
class ShotType(str, Enum):
    EXTREME_CLOSE_UP = "extreme_close_up"
    CLOSE_UP = "close_up"
    MEDIUM_SHOT = "medium_shot"
    LONG_SHOT = "long_shot"
    EXTREME_LONG_SHOT = "extreme_long_shot"
    WIDE_SHOT = "wide_shot"


class CameraMovement(str, Enum):
    STATIC = "static"
    PAN = "pan"
    TILT = "tilt"
    DOLLY_IN = "dolly_in"
    DOLLY_OUT = "dolly_out"
    TRUCK = "truck"
    PEDESTAL = "pedestal"
    HANDHELD = "handheld"
    GIMBAL = "gimbal"
    DRONE = "drone"


class CameraAngle(str, Enum):
    EYE_LEVEL = "eye_level"
    LOW_ANGLE = "low_angle"
    HIGH_ANGLE = "high_angle"
    DUTCH_ANGLE = "dutch_angle"
    OVERHEAD = "overhead"
    BIRDS_EYE = "birds_eye"


class VisualStyle(str, Enum):
    CINEMATIC = "cinematic"
    DOCUMENTARY = "documentary"
    COMMERCIAL = "commercial"
    MUSIC_VIDEO = "music_video"
    ANIME = "anime"
    MINIMALIST = "minimalist"
    VINTAGE = "vintage"
    NOIR = "noir"
    CYBERPUNK = "cyberpunk"


class LightingType(str, Enum):
    NATURAL = "natural"
    GOLDEN_HOUR = "golden_hour"
    BLUE_HOUR = "blue_hour"
    SOFT = "soft"
    HARD = "hard"
    NEON = "neon"
    STUDIO = "studio"
    DRAMATIC = "dramatic"
    LOW_KEY = "low_key"
    HIGH_KEY = "high_key"


class AspectRatio(str, Enum):
    WIDESCREEN = "16:9"
    VERTICAL = "9:16"
    STANDARD = "4:3"
    PORTRAIT = "3:4"
    SQUARE = "1:1"
    ULTRAWIDE = "21:9"


# ─── Canonical Parameters ─────────────────────────────────────────
@dataclass(frozen=True)
class CameraConfig:
    shot_type: ShotType
    movement: CameraMovement
    angle: CameraAngle
    lens: Optional[str] = None  # e.g. "35mm", "50mm f/1.8"

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "shotType": self.shot_type.value,
            "movement": self.movement.value,
            "angle": self.angle.value,
        }
        if self.lens is not None:
            data["lens"] = self.lens
        return data


@dataclass(frozen=True)
class StyleConfig:
    visual: VisualStyle
    lighting: LightingType
    color_grade: str
    quality: str  # e.g. "4K", "1080p cinematic"
    film_stock: Optional[str] = None  # e.g. "Kodak Vision3"

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "visual": self.visual.value,
            "lighting": self.lighting.value,
            "colorGrade": self.color_grade,
            "quality": self.quality,
        }
        if self.film_stock is not None:
            data["filmStock"] = self.film_stock
        return data


@dataclass(frozen=True)
class PromptParams:
    """Fully defaulted generation request shared by every video target."""
    subject: str
    action: str
    scene: str
    camera: CameraConfig
    style: StyleConfig
    aspect_ratio: AspectRatio
    audio: Optional[str] = None
    duration: Optional[float] = None
    negative_prompt: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "subject": self.subject,
            "action": self.action,
            "scene": self.scene,
            "camera": self.camera.to_dict(),
            "style": self.style.to_dict(),
        }
        if self.audio is not None:
            data["audio"] = self.audio
        if self.duration is not None:
            data["duration"] = self.duration
        data["aspectRatio"] = self.aspect_ratio.value
        if self.negative_prompt is not None:
            data["negativePrompt"] = self.negative_prompt
        return data


# ─── Rendered Outputs ─────────────────────────────────────────────
@dataclass(frozen=True)
class VideoPrompts:
    sora2: str
    veo3: str
    seedance2: str

    def to_dict(self) -> Dict[str, str]:
        return {"sora2": self.sora2, "veo3": self.veo3, "seedance2": self.seedance2}


@dataclass(frozen=True)
class ImagePrompts:
    midjourney: str
    stable_diffusion: str
    dalle3: str
    ideogram: str
    nano_banana: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "midjourney": self.midjourney,
            "stableDiffusion": self.stable_diffusion,
            "dalle3": self.dalle3,
            "ideogram": self.ideogram,
            "nanoBanana": self.nano_banana,
        }


# ─── Generation Record ────────────────────────────────────────────
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_id() -> str:
    """Return "<epoch-ms>-<9 base36 chars>"."""
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"{_now_ms()}-{suffix}"


@dataclass
class GenerationRecord:
    id: str
    mode: str  # "text" | "video" | "image"
    timestamp: int
    params: Optional[PromptParams] = None
    outputs: Dict[str, str] = field(default_factory=dict)
    source_text: Optional[str] = None
    source_video: Optional[Dict[str, object]] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "id": self.id,
            "mode": self.mode,
            "timestamp": self.timestamp,
            "outputs": dict(self.outputs),
        }
        if self.params is not None:
            data["params"] = self.params.to_dict()
        if self.source_text is not None:
            data["sourceText"] = self.source_text
        if self.source_video is not None:
            data["sourceVideo"] = dict(self.source_video)
        return data


def new_record(
    mode: str,
    source: object,
    outputs: Dict[str, str],
    params: Optional[PromptParams] = None,
) -> GenerationRecord:
    """Build a record; a str source is kept as text, a mapping as video info."""
    record = GenerationRecord(
        id=new_id(),
        mode=mode,
        timestamp=_now_ms(),
        params=params,
        outputs=dict(outputs),
    )
    if isinstance(source, str):
        record.source_text = source
    elif isinstance(source, dict):
        record.source_video = dict(source)
    return record
