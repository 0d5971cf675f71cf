"""Smart Prompt: request-level flows.

Each flow awaits at most one or two provider calls and then hands off to the
pure core. Provider failures never escape: the flow substitutes the local
value and attaches an advisory note instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .canonicalize import SYSTEM_PROMPT, canonicalize, default_params, extract_json_object
from .config import get_settings
from .image_analysis import (
    ANALYSIS_USER_PROMPT,
    CAPTION_PROMPT,
    VISION_SYSTEM_PROMPT,
    ImageAnalysis,
    inspect_image,
    parse_image_analysis,
    reduce_image_analysis,
    to_data_url,
)
from .image_renderer import IMAGE_SYSTEM_PROMPT, RandomSource, merge_ai_prompts, render_image
from .models import GenerationRecord, ImagePrompts, PromptParams, VideoPrompts, new_record
from .provider_base import TextCompletionProvider, VideoMetadataProvider, VisionCompletionProvider
from .video_metadata import (
    VideoMetadata,
    VideoPlatform,
    detect_platform,
    platform_name,
    video_fallback_params,
)
from .video_renderer import render_video

logger = logging.getLogger(__name__)

AI_UNAVAILABLE_NOTE = "AI optimization unavailable"


@dataclass
class TextGeneration:
    params: PromptParams
    outputs: VideoPrompts
    record: GenerationRecord
    note: Optional[str] = None


@dataclass
class ImageGeneration:
    prompts: ImagePrompts
    note: Optional[str] = None


@dataclass
class ImageUploadResult:
    analysis: ImageAnalysis
    description: str
    prompts: ImagePrompts
    note: Optional[str] = None


@dataclass
class VideoLinkResult:
    platform: VideoPlatform
    metadata: VideoMetadata
    params: PromptParams
    outputs: VideoPrompts
    record: GenerationRecord

    @property
    def platform_name(self) -> str:
        return platform_name(self.platform)


def _require_text(text: str) -> str:
    if not text or not text.strip():
        raise ValueError("Text is required")
    return text.strip()


def parse_natural_language(text: str, provider: Optional[TextCompletionProvider]) -> tuple[PromptParams, bool]:
    """Ask the LLM for a structured extraction; returns (params, ai_used)."""
    if provider is None:
        return default_params(), False
    settings = get_settings()
    try:
        content = provider.complete(
            SYSTEM_PROMPT,
            text,
            temperature=settings.text_temperature,
            max_tokens=settings.text_max_tokens,
        )
    except Exception as e:
        logger.warning("AI parsing failed, using defaults: %s", e)
        return default_params(), False
    parsed = extract_json_object(content)
    if parsed is None:
        logger.warning("AI parsing returned no JSON object, using defaults")
        return default_params(), False
    return canonicalize(parsed), True


def generate_from_text(
    text: str,
    provider: Optional[TextCompletionProvider] = None,
    language: Optional[str] = None,
) -> TextGeneration:
    """Free text → canonical params → sora2/veo3/seedance2 prompts."""
    text = _require_text(text)
    params, ai_used = parse_natural_language(text, provider)
    outputs = render_video(params, language)
    return TextGeneration(
        params=params,
        outputs=outputs,
        record=new_record("text", text, outputs.to_dict(), params),
        note=None if ai_used else AI_UNAVAILABLE_NOTE,
    )


def generate_image_prompts(
    text: str,
    provider: Optional[TextCompletionProvider] = None,
    rng: Optional[RandomSource] = None,
) -> ImageGeneration:
    """AI-optimized image prompts, degrading key by key to local rendering."""
    text = _require_text(text)
    if provider is None:
        return ImageGeneration(prompts=render_image(text, rng))
    settings = get_settings()
    try:
        content = provider.complete(
            IMAGE_SYSTEM_PROMPT,
            text,
            temperature=settings.image_temperature,
            max_tokens=settings.image_max_tokens,
        )
    except Exception as e:
        logger.warning("AI image prompt failed: %s", e)
        return ImageGeneration(prompts=render_image(text, rng), note=AI_UNAVAILABLE_NOTE)
    parsed = extract_json_object(content)
    if parsed is None:
        logger.warning("AI image prompt returned no JSON object")
        return ImageGeneration(prompts=render_image(text, rng), note=AI_UNAVAILABLE_NOTE)
    return ImageGeneration(prompts=merge_ai_prompts(parsed, text, rng))


def analyze_image(data: bytes, provider: Optional[VisionCompletionProvider]) -> ImageAnalysis:
    """Validate the upload and ask the vision model to describe it.

    Raises ImageValidationError for rejected uploads; model failures yield an
    empty (or caption-only) analysis.
    """
    info = inspect_image(data)
    if provider is None:
        return ImageAnalysis()
    image_url = to_data_url(data, info.mime_type)
    try:
        analysis = parse_image_analysis(
            provider.describe_image(VISION_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT, image_url)
        )
    except Exception as e:
        logger.warning("Image analysis failed: %s", e)
        analysis = ImageAnalysis()

    if not analysis.caption:
        try:
            caption = provider.describe_image("", CAPTION_PROMPT, image_url)
        except Exception as e:
            logger.warning("Caption fallback failed: %s", e)
            caption = ""
        analysis.caption = caption.strip() if isinstance(caption, str) else ""
    return analysis


def generate_from_image(
    data: bytes,
    provider: Optional[VisionCompletionProvider],
    rng: Optional[RandomSource] = None,
) -> ImageUploadResult:
    analysis = analyze_image(data, provider)
    description = reduce_image_analysis(analysis)
    return ImageUploadResult(
        analysis=analysis,
        description=description,
        prompts=render_image(description, rng),
        note=None if description else AI_UNAVAILABLE_NOTE,
    )


def generate_from_video_url(
    url: str,
    provider: VideoMetadataProvider,
    language: Optional[str] = None,
) -> Optional[VideoLinkResult]:
    """Share link → metadata → canonical params → video prompts.

    Returns None for unsupported links, unknown videos and provider failures.
    """
    if not url or not url.strip():
        raise ValueError("URL is required")
    platform = detect_platform(url)
    if platform is VideoPlatform.UNKNOWN:
        logger.info("Unsupported platform for %s", url)
        return None
    try:
        meta = provider.fetch(platform, url.strip())
    except Exception as e:
        logger.warning("Video metadata fetch failed for %s: %s", platform.value, e)
        return None
    if meta is None:
        return None

    params = video_fallback_params(meta)
    outputs = render_video(params, language)
    source = {"platform": platform.value, "url": url.strip(), "title": meta.title, "cover": meta.cover}
    return VideoLinkResult(
        platform=platform,
        metadata=meta,
        params=params,
        outputs=outputs,
        record=new_record("video", source, outputs.to_dict(), params),
    )
