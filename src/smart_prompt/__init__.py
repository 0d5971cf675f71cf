"""Smart Prompt: multi-model prompt normalization and rendering.

Pure entry points (no I/O):

- ``canonicalize(raw)`` -> ``PromptParams``
- ``render_video(params)`` -> ``VideoPrompts`` (sora2, veo3, seedance2)
- ``render_image(description)`` -> ``ImagePrompts`` (five image models)
- ``reduce_image_analysis(analysis)`` -> description string
- ``adapt_video_metadata(meta)`` -> partial canonical set
"""

from .canonicalize import canonicalize, default_params
from .image_analysis import ImageAnalysis, reduce_image_analysis
from .image_renderer import render_image
from .models import ImagePrompts, PromptParams, VideoPrompts
from .video_metadata import VideoMetadata, adapt_video_metadata
from .video_renderer import render_video

__all__ = [
    "ImageAnalysis",
    "ImagePrompts",
    "PromptParams",
    "VideoMetadata",
    "VideoPrompts",
    "adapt_video_metadata",
    "canonicalize",
    "default_params",
    "reduce_image_analysis",
    "render_image",
    "render_video",
]

__version__ = "1.0.0"
