"""Smart Prompt: social-video link support.

Detects the platform of a share link and adapts the metadata returned by a
``VideoMetadataProvider`` into a partial canonical parameter set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from .canonicalize import canonicalize
from .models import PromptParams


class VideoPlatform(str, Enum):
    DOUYIN = "douyin"
    TIKTOK = "tiktok"
    BILIBILI = "bilibili"
    KUAISHOU = "kuaishou"
    XIAOHONGSHU = "xiaohongshu"
    WEIBO = "weibo"
    UNKNOWN = "unknown"


_PLATFORM_PATTERNS: list[tuple[VideoPlatform, re.Pattern[str]]] = [
    (VideoPlatform.DOUYIN, re.compile(r"douyin\.com|v\.douyin\.com", re.I)),
    (VideoPlatform.TIKTOK, re.compile(r"tiktok\.com|vm\.tiktok\.com|vt\.tiktok\.com", re.I)),
    (VideoPlatform.BILIBILI, re.compile(r"bilibili\.com|b23\.tv|bili\.2233\.cn", re.I)),
    (VideoPlatform.KUAISHOU, re.compile(r"kuaishou\.com|chenzhongtech\.com", re.I)),
    (VideoPlatform.XIAOHONGSHU, re.compile(r"xiaohongshu\.com|xhslink\.com", re.I)),
    (VideoPlatform.WEIBO, re.compile(r"weibo\.com|weibo\.cn|t\.cn", re.I)),
]

_PLATFORM_NAMES = {
    VideoPlatform.DOUYIN: "抖音",
    VideoPlatform.TIKTOK: "TikTok",
    VideoPlatform.BILIBILI: "哔哩哔哩",
    VideoPlatform.KUAISHOU: "快手",
    VideoPlatform.XIAOHONGSHU: "小红书",
    VideoPlatform.WEIBO: "微博",
    VideoPlatform.UNKNOWN: "未知平台",
}

SUPPORTED_PLATFORMS = [
    {"id": "douyin", "name": "抖音", "urlPattern": "v.douyin.com"},
    {"id": "tiktok", "name": "TikTok", "urlPattern": "tiktok.com"},
    {"id": "bilibili", "name": "哔哩哔哩", "urlPattern": "bilibili.com / b23.tv"},
    {"id": "kuaishou", "name": "快手", "urlPattern": "kuaishou.com"},
    {"id": "xiaohongshu", "name": "小红书", "urlPattern": "xiaohongshu.com"},
    {"id": "weibo", "name": "微博", "urlPattern": "weibo.com"},
]

# Tag keyword → style, checked in this order; first hit wins.
TAG_STYLE_RULES: list[tuple[tuple[str, ...], dict[str, str]]] = [
    (("搞笑", "comedy"), {
        "visual": "cinematic", "lighting": "natural",
        "colorGrade": "bright and vibrant", "quality": "1080p",
    }),
    (("美食", "food"), {
        "visual": "commercial", "lighting": "soft",
        "colorGrade": "warm and appetizing", "quality": "4K",
    }),
    (("旅行", "travel"), {
        "visual": "documentary", "lighting": "natural",
        "colorGrade": "cinematic", "quality": "4K",
    }),
]

# Defaults the link flow applies before canonicalization
VIDEO_FALLBACK_SUBJECT = "视频内容"
VIDEO_FALLBACK_ACTION = "视频中的场景和动作"
VIDEO_FALLBACK_CAMERA = {"shotType": "medium_shot", "movement": "gimbal", "angle": "eye_level", "lens": "35mm"}
VIDEO_FALLBACK_STYLE = {"visual": "cinematic", "lighting": "natural", "colorGrade": "natural colors", "quality": "1080p"}


@dataclass
class VideoAuthor:
    name: str = ""
    avatar: Optional[str] = None


@dataclass
class VideoMusic:
    title: str = ""
    author: str = ""


@dataclass
class VideoMetadata:
    platform: VideoPlatform = VideoPlatform.UNKNOWN
    video_id: str = ""
    title: str = ""
    description: str = ""
    author: VideoAuthor = field(default_factory=VideoAuthor)
    cover: str = ""
    video_url: Optional[str] = None
    duration: Optional[float] = None
    tags: list[str] = field(default_factory=list)
    music: Optional[VideoMusic] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform.value,
            "id": self.video_id,
            "title": self.title,
            "description": self.description,
            "author": {"name": self.author.name, "avatar": self.author.avatar},
            "cover": self.cover,
            "tags": list(self.tags),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "VideoMetadata":
        author = data.get("author") or {}
        music = data.get("music")
        try:
            platform = VideoPlatform(str(data.get("platform", "unknown")))
        except ValueError:
            platform = VideoPlatform.UNKNOWN
        duration = data.get("duration")
        return VideoMetadata(
            platform=platform,
            video_id=str(data.get("videoId", data.get("video_id", "")) or ""),
            title=str(data.get("title", "") or ""),
            description=str(data.get("description", "") or ""),
            author=VideoAuthor(
                name=str(author.get("name", "") or "") if isinstance(author, Mapping) else "",
                avatar=author.get("avatar") if isinstance(author, Mapping) else None,
            ),
            cover=str(data.get("cover", "") or ""),
            video_url=data.get("videoUrl") or data.get("video_url"),
            duration=float(duration) if isinstance(duration, (int, float)) else None,
            tags=_tags(data.get("tags")),
            music=VideoMusic(
                title=str(music.get("title", "") or ""),
                author=str(music.get("author", "") or ""),
            ) if isinstance(music, Mapping) else None,
        )


def _tags(value: Any) -> list[str]:
    # Some sources send a single comma-separated string
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    return [str(t).strip() for t in value if t and str(t).strip()]


def detect_platform(url: str) -> VideoPlatform:
    for platform, pattern in _PLATFORM_PATTERNS:
        if pattern.search(url or ""):
            return platform
    return VideoPlatform.UNKNOWN


def platform_name(platform: VideoPlatform) -> str:
    return _PLATFORM_NAMES[platform]


def infer_style_from_tags(tags: list[str]) -> Optional[dict[str, str]]:
    """Single pass over the joined tags; keywords are case-sensitive."""
    if not tags:
        return None
    tag_str = ", ".join(tags)
    for keywords, style in TAG_STYLE_RULES:
        if any(keyword in tag_str for keyword in keywords):
            return dict(style)
    return None


def adapt_video_metadata(meta: VideoMetadata) -> dict[str, Any]:
    """Map scraped metadata onto a partial canonical set.

    Only subject, scene, audio and (when a tag rule matches) style are set;
    the caller defaults everything else through ``canonicalize``.
    """
    params: dict[str, Any] = {
        "subject": f"视频作者: {meta.author.name}" if meta.author.name else "",
        "scene": meta.description or meta.title,
        "audio": f"{meta.music.title} - {meta.music.author}" if meta.music else None,
    }
    style = infer_style_from_tags(meta.tags)
    if style:
        params["style"] = style
    return params


def video_fallback_params(meta: VideoMetadata) -> PromptParams:
    """Complete a link-derived partial set with the link flow's own defaults."""
    partial = adapt_video_metadata(meta)
    return canonicalize({
        "subject": partial["subject"] or meta.author.name or VIDEO_FALLBACK_SUBJECT,
        "action": VIDEO_FALLBACK_ACTION,
        "scene": partial["scene"],
        "camera": dict(VIDEO_FALLBACK_CAMERA),
        "style": partial.get("style") or dict(VIDEO_FALLBACK_STYLE),
        "audio": partial["audio"] or "",
        "aspectRatio": "16:9",
    })
