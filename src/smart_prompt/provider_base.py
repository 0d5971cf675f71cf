from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .video_metadata import VideoMetadata, VideoPlatform


@dataclass
class ProviderError(Exception):
    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code}: {self.message}"


class TextCompletionProvider(ABC):
    @abstractmethod
    def complete(self, system: str, user: str, *, temperature: Optional[float] = None,
                 max_tokens: Optional[int] = None) -> str:
        raise NotImplementedError


class VisionCompletionProvider(ABC):
    @abstractmethod
    def describe_image(self, system: str, prompt: str, image_url: str) -> str:
        raise NotImplementedError


class VideoMetadataProvider(ABC):
    @abstractmethod
    def fetch(self, platform: "VideoPlatform", url: str) -> Optional["VideoMetadata"]:
        """Return metadata, or None when the video cannot be found."""
        raise NotImplementedError
