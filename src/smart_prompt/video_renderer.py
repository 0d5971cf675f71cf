"""Smart Prompt: video prompt renderer.

Turns one canonical ``PromptParams`` into three target syntaxes:

- sora2: one localized sentence built from phrase tables
- veo3: English clauses joined with ". "
- seedance2: labelled lines, one field per line
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .config import get_settings
from .models import (
    CameraConfig,
    CameraMovement,
    LightingType,
    PromptParams,
    ShotType,
    StyleConfig,
    VideoPrompts,
    VisualStyle,
)

# ─── Phrase Tables ────────────────────────────────────────────────
_SHOT_PHRASES: dict[str, Mapping[ShotType, str]] = {
    "zh": MappingProxyType({
        ShotType.EXTREME_CLOSE_UP: "超特写",
        ShotType.CLOSE_UP: "特写",
        ShotType.MEDIUM_SHOT: "中景",
        ShotType.LONG_SHOT: "远景",
        ShotType.EXTREME_LONG_SHOT: "超远景",
        ShotType.WIDE_SHOT: "广角",
    }),
    "en": MappingProxyType({
        ShotType.EXTREME_CLOSE_UP: "extreme close-up",
        ShotType.CLOSE_UP: "close-up",
        ShotType.MEDIUM_SHOT: "medium shot",
        ShotType.LONG_SHOT: "long shot",
        ShotType.EXTREME_LONG_SHOT: "extreme long shot",
        ShotType.WIDE_SHOT: "wide-angle shot",
    }),
}

_MOVEMENT_PHRASES: dict[str, Mapping[CameraMovement, str]] = {
    "zh": MappingProxyType({
        CameraMovement.STATIC: "固定镜头",
        CameraMovement.PAN: "摇镜头",
        CameraMovement.TILT: "俯仰",
        CameraMovement.DOLLY_IN: "推进",
        CameraMovement.DOLLY_OUT: "拉远",
        CameraMovement.TRUCK: "横移",
        CameraMovement.PEDESTAL: "升降",
        CameraMovement.HANDHELD: "手持",
        CameraMovement.GIMBAL: "稳定器",
        CameraMovement.DRONE: "无人机",
    }),
    "en": MappingProxyType({
        CameraMovement.STATIC: " on a locked-off camera",
        CameraMovement.PAN: " with a slow pan",
        CameraMovement.TILT: " with a tilt",
        CameraMovement.DOLLY_IN: " dollying in",
        CameraMovement.DOLLY_OUT: " dollying out",
        CameraMovement.TRUCK: " with a lateral truck",
        CameraMovement.PEDESTAL: " on a pedestal move",
        CameraMovement.HANDHELD: " handheld",
        CameraMovement.GIMBAL: " on a gimbal",
        CameraMovement.DRONE: " from a drone",
    }),
}

_VISUAL_PHRASES: dict[str, Mapping[VisualStyle, str]] = {
    "zh": MappingProxyType({
        VisualStyle.CINEMATIC: "电影感",
        VisualStyle.DOCUMENTARY: "纪录片风格",
        VisualStyle.COMMERCIAL: "商业广告",
        VisualStyle.MUSIC_VIDEO: "音乐录影带风格",
        VisualStyle.ANIME: "动画风格",
        VisualStyle.MINIMALIST: "极简主义",
        VisualStyle.VINTAGE: "复古风格",
        VisualStyle.NOIR: "黑色电影",
        VisualStyle.CYBERPUNK: "赛博朋克",
    }),
    "en": MappingProxyType({
        VisualStyle.CINEMATIC: "cinematic look",
        VisualStyle.DOCUMENTARY: "documentary style",
        VisualStyle.COMMERCIAL: "commercial advert look",
        VisualStyle.MUSIC_VIDEO: "music video style",
        VisualStyle.ANIME: "anime style",
        VisualStyle.MINIMALIST: "minimalist look",
        VisualStyle.VINTAGE: "vintage style",
        VisualStyle.NOIR: "film noir",
        VisualStyle.CYBERPUNK: "cyberpunk aesthetic",
    }),
}

_LIGHTING_PHRASES: dict[str, Mapping[LightingType, str]] = {
    "zh": MappingProxyType({
        LightingType.NATURAL: "自然光",
        LightingType.GOLDEN_HOUR: "黄金时刻",
        LightingType.BLUE_HOUR: "蓝色时刻",
        LightingType.SOFT: "柔光",
        LightingType.HARD: "硬光",
        LightingType.NEON: "霓虹灯",
        LightingType.STUDIO: "影棚灯光",
        LightingType.DRAMATIC: "戏剧性光影",
        LightingType.LOW_KEY: "低调",
        LightingType.HIGH_KEY: "高调",
    }),
    "en": MappingProxyType({
        LightingType.NATURAL: " in natural light",
        LightingType.GOLDEN_HOUR: " at golden hour",
        LightingType.BLUE_HOUR: " at blue hour",
        LightingType.SOFT: " with soft light",
        LightingType.HARD: " with hard light",
        LightingType.NEON: " under neon lights",
        LightingType.STUDIO: " with studio lighting",
        LightingType.DRAMATIC: " with dramatic lighting",
        LightingType.LOW_KEY: " in low-key lighting",
        LightingType.HIGH_KEY: " in high-key lighting",
    }),
}

# Sentence templates per language
_SORA_TEMPLATES: dict[str, dict[str, str]] = {
    "zh": {"placement": "{subject}在{scene}", "audio": "音频: {audio}", "grade": "{phrase}{grade}"},
    "en": {"placement": "{subject} in {scene}", "audio": "audio: {audio}", "grade": "{phrase}, {grade}"},
}

SORA_SEPARATOR = "，"
VEO_SEPARATOR = ". "


def humanize(token: object) -> str:
    """'medium_shot' -> 'medium shot'."""
    value = getattr(token, "value", token)
    return str(value).replace("_", " ")


# ─── Targets ──────────────────────────────────────────────────────
def render_sora2(params: PromptParams, language: Optional[str] = None) -> str:
    lang = _resolve_language(language)
    template = _SORA_TEMPLATES[lang]
    parts = [
        _camera_phrase(params.camera, lang),
        template["placement"].format(subject=params.subject, scene=params.scene),
        params.action,
        _style_phrase(params.style, lang),
    ]
    if params.audio:
        parts.append(template["audio"].format(audio=params.audio))
    parts.append(f"{params.style.quality}, {params.aspect_ratio.value}")
    return SORA_SEPARATOR.join(parts)


def render_veo3(params: PromptParams) -> str:
    camera, style = params.camera, params.style
    parts = [f"{humanize(camera.shot_type)}, {humanize(camera.movement)}"]
    if camera.lens:
        parts.append(camera.lens)
    parts.append(params.subject)
    parts.append(params.action)
    parts.append(params.scene)
    parts.append(f"{humanize(style.lighting)} lighting")
    parts.append(f"{style.visual.value} style, {style.color_grade}")
    if params.audio:
        parts.append(f"with {params.audio}")
    parts.append(style.quality)
    return VEO_SEPARATOR.join(parts)


def render_seedance2(params: PromptParams) -> str:
    camera, style = params.camera, params.style
    lines = [
        f"Subject: {params.subject}",
        f"Action: {params.action}",
        f"Scene: {params.scene}",
        f"Camera: {humanize(camera.shot_type)} + {humanize(camera.movement)}, {humanize(camera.angle)}",
    ]
    if camera.lens:
        lines.append(f"Lens: {camera.lens}")
    lines.append(f"Style: {style.visual.value}, {humanize(style.lighting)} light, {style.color_grade}")
    if params.audio:
        lines.append(f"Audio: {params.audio}")
    lines.append(f"Output: {style.quality}, {params.aspect_ratio.value}")
    return "\n".join(lines)


def render_video(params: PromptParams, language: Optional[str] = None) -> VideoPrompts:
    """Render all three video targets."""
    return VideoPrompts(
        sora2=render_sora2(params, language),
        veo3=render_veo3(params),
        seedance2=render_seedance2(params),
    )


# ── Private ───────────────────────────────────────────────────────

def _resolve_language(language: Optional[str]) -> str:
    lang = (language or get_settings().language).lower()
    return lang if lang in _SORA_TEMPLATES else "zh"


def _camera_phrase(camera: CameraConfig, lang: str) -> str:
    shot = _SHOT_PHRASES[lang].get(camera.shot_type, "")
    movement = _MOVEMENT_PHRASES[lang].get(camera.movement, "")
    return shot + movement


def _style_phrase(style: StyleConfig, lang: str) -> str:
    visual = _VISUAL_PHRASES[lang].get(style.visual, "")
    lighting = _LIGHTING_PHRASES[lang].get(style.lighting, "")
    return _SORA_TEMPLATES[lang]["grade"].format(phrase=visual + lighting, grade=style.color_grade)
