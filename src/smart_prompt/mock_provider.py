from __future__ import annotations

import json
from typing import Optional

from .provider_base import TextCompletionProvider, VideoMetadataProvider, VisionCompletionProvider
from .video_metadata import VideoAuthor, VideoMetadata, VideoPlatform


class MockProvider(TextCompletionProvider, VisionCompletionProvider, VideoMetadataProvider):
    """Offline provider that answers every call with canned JSON."""

    def __init__(self, text_model: str = "mock-text", vision_model: str = "mock-vision") -> None:
        self.text_model = text_model
        self.vision_model = vision_model

    def complete(self, system: str, user: str, *, temperature: Optional[float] = None,
                 max_tokens: Optional[int] = None) -> str:
        if '"nanoBanana"' in system:
            return json.dumps({
                "midjourney": f"{user}, dramatic, rim light --ar 16:9 --v 6",
                "stableDiffusion": f"{user}, masterpiece, 8k resolution",
                "dalle3": user,
                "ideogram": f"{user}, typography design",
                "nanoBanana": f"cute kawaii illustration of {user}",
            }, ensure_ascii=False)
        return json.dumps({
            "subject": user[:80] or "a person",
            "action": "moving through the frame",
            "scene": "modern indoor environment",
            "camera": {"shot_type": "medium_shot", "movement": "dolly_in", "angle": "eye_level", "lens": "35mm"},
            "style": {"visual": "cinematic", "lighting": "golden_hour", "color": "warm tones", "quality": "4K cinematic"},
            "audio": "",
            "duration": 8,
            "aspect_ratio": "16:9",
        }, ensure_ascii=False)

    def describe_image(self, system: str, prompt: str, image_url: str) -> str:
        return json.dumps({
            "caption": "A mock image used for offline runs.",
            "subjects": ["placeholder subject"],
            "style": "photorealistic",
            "lighting": "soft natural light",
            "composition": "centered",
            "colors": ["grey", "white"],
            "mood": "calm",
            "technical": "mock",
        })

    def fetch(self, platform: VideoPlatform, url: str) -> Optional[VideoMetadata]:
        return VideoMetadata(
            platform=platform,
            video_id="mock",
            title="mock video",
            description="street food tour",
            author=VideoAuthor(name="mock author"),
            tags=["美食", "vlog"],
        )
