"""Smart Prompt: image prompt renderer.

Supports Midjourney, Stable Diffusion, DALL-E 3, Ideogram and Nano Banana.
Each target is a ``prefix + description + enhancers + suffix`` string, hard-cut
to the model's maximum length.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence

from .models import ImagePrompts


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


# ─── Model Catalogue ──────────────────────────────────────────────
SUPPORTED_IMAGE_MODELS = [
    {"id": "midjourney", "name": "Midjourney", "description": "Strong artistic range, many styles"},
    {"id": "stable-diffusion", "name": "Stable Diffusion", "description": "Open source, highly controllable"},
    {"id": "dalle3", "name": "DALL-E 3", "description": "Strong language understanding"},
    {"id": "ideogram", "name": "Ideogram", "description": "Good at rendering text"},
    {"id": "nano-banana", "name": "Nano Banana", "description": "Cute cartoon style"},
]


@dataclass(frozen=True)
class ImageFormat:
    prefix: str
    suffix: str
    max_length: int
    parameters: tuple[str, ...] = field(default_factory=tuple)

    def finish(self, body: str) -> str:
        return (self.prefix + body + self.suffix)[: self.max_length]


MODEL_FORMATS: dict[str, ImageFormat] = {
    "midjourney": ImageFormat(
        prefix="",
        suffix="--ar 16:9 --v 6 --style expressive --q 2",
        max_length=4000,
        parameters=("--ar", "--v", "--style", "--q", "--iw", "--no", "--seed"),
    ),
    "stable-diffusion": ImageFormat(
        prefix="",
        suffix="",
        max_length=2000,
        parameters=("--seed", "--steps", "--cfg", "--sampler", "--denoise"),
    ),
    "dalle3": ImageFormat(
        prefix="",
        suffix="",
        max_length=4000,
        parameters=("--size", "--quality", "--style"),
    ),
    "ideogram": ImageFormat(
        prefix="",
        suffix="",
        max_length=2000,
        parameters=("--aspect", "--seed", "--prompt-weight"),
    ),
    "nano-banana": ImageFormat(
        prefix="cute kawaii illustration of ",
        suffix=", disney style, cute, adorable, pastel colors, soft lighting",
        max_length=500,
        parameters=("--seed",),
    ),
}


def image_model_catalogue() -> list[dict[str, Any]]:
    """Catalogue entries with each target's length cap and accepted flags."""
    return [
        {
            **model,
            "maxLength": MODEL_FORMATS[model["id"]].max_length,
            "parameters": list(MODEL_FORMATS[model["id"]].parameters),
        }
        for model in SUPPORTED_IMAGE_MODELS
    ]


# ─── Enhancer Vocabulary ──────────────────────────────────────────
STYLE_ENHANCERS: dict[str, tuple[str, ...]] = {
    "lighting": (
        "cinematic lighting", "golden hour", "soft natural light", "studio lighting",
        "dramatic shadows", "backlit", "rim light", "volumetric lighting",
    ),
    "mood": (
        "peaceful", "dramatic", "mysterious", "energetic", "romantic", "melancholic",
        "ethereal", "dreamy", "vibrant", "moody",
    ),
    "quality": (
        "highly detailed", "8k resolution", "photorealistic", "masterpiece",
        "award winning", "professional photography", "concept art",
    ),
}

ENHANCEMENT_SUFFIX = ", highly detailed, professional quality"
IDEOGRAM_INSERT = ", typography design"

IMAGE_SYSTEM_PROMPT = """\
You are an expert AI image prompt engineer.
Generate optimized prompts for 5 different AI image models based on the user's description.

Output ONLY valid JSON in this exact format:
{
  "midjourney": "optimized prompt for Midjourney",
  "stableDiffusion": "optimized prompt for Stable Diffusion",
  "dalle3": "optimized prompt for DALL-E 3",
  "ideogram": "optimized prompt for Ideogram",
  "nanoBanana": "optimized prompt for Nano Banana"
}

Rules:
1. Each prompt should be 50-200 characters
2. Include relevant style, lighting, and composition keywords
3. Use appropriate syntax for each model
4. Output ONLY JSON, no other text"""


def enhance_description(text: str) -> str:
    """Append generic quality modifiers unless the text already has some."""
    if "detailed" not in text and "quality" not in text:
        return text + ENHANCEMENT_SUFFIX
    return text


# ─── Targets ──────────────────────────────────────────────────────
def render_midjourney(description: str, rng: Optional[RandomSource] = None) -> str:
    rng = rng or random.Random()
    mood = rng.choice(STYLE_ENHANCERS["mood"])
    lighting = rng.choice(STYLE_ENHANCERS["lighting"])
    # Trailing space before the --ar flags; the suffix itself starts with "--"
    return MODEL_FORMATS["midjourney"].finish(f"{description}, {mood}, {lighting} ")


def render_stable_diffusion(description: str, rng: Optional[RandomSource] = None) -> str:
    rng = rng or random.Random()
    quality = rng.choice(STYLE_ENHANCERS["quality"])
    return MODEL_FORMATS["stable-diffusion"].finish(f"{description}, {quality}")


def render_dalle3(description: str) -> str:
    return MODEL_FORMATS["dalle3"].finish(description)


def render_ideogram(description: str) -> str:
    return MODEL_FORMATS["ideogram"].finish(description + IDEOGRAM_INSERT)


def render_nano_banana(description: str) -> str:
    return MODEL_FORMATS["nano-banana"].finish(description)


def _render_targets(description: str, rng: RandomSource) -> ImagePrompts:
    return ImagePrompts(
        midjourney=render_midjourney(description, rng),
        stable_diffusion=render_stable_diffusion(description, rng),
        dalle3=render_dalle3(description),
        ideogram=render_ideogram(description),
        nano_banana=render_nano_banana(description),
    )


def render_image(description: str, rng: Optional[RandomSource] = None) -> ImagePrompts:
    """Local deterministic-shape path: enhance once, then render every target."""
    return _render_targets(enhance_description(description), rng or random.Random())


def merge_ai_prompts(
    parsed: Mapping[str, Any],
    description: str,
    rng: Optional[RandomSource] = None,
) -> ImagePrompts:
    """Overlay AI-written prompts on the local rendering, key by key.

    Keys that are missing or falsy keep the local value, which is rendered
    from the raw description without the enhancement step.
    """
    local = _render_targets(description, rng or random.Random())

    def pick(key: str, target: str, fallback: str) -> str:
        value = parsed.get(key)
        if not value:
            return fallback
        return str(value)[: MODEL_FORMATS[target].max_length]

    return ImagePrompts(
        midjourney=pick("midjourney", "midjourney", local.midjourney),
        stable_diffusion=pick("stableDiffusion", "stable-diffusion", local.stable_diffusion),
        dalle3=pick("dalle3", "dalle3", local.dalle3),
        ideogram=pick("ideogram", "ideogram", local.ideogram),
        nano_banana=pick("nanoBanana", "nano-banana", local.nano_banana),
    )
