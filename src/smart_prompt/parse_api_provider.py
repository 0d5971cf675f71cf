from __future__ import annotations

import json
from typing import Optional

import requests

from .config import Settings, get_settings
from .provider_base import ProviderError, VideoMetadataProvider
from .video_metadata import VideoMetadata, VideoPlatform

_USER_AGENT = "Mozilla/5.0 (iPhone; CPU iPhone OS 13_0 like Mac OS X) AppleWebKit/605.1.15"


class ParseApiMetadataProvider(VideoMetadataProvider):
    """Resolves share links through an external JSON parse service.

    The service is called as ``GET {PARSE_API_URL}?platform=<id>&url=<link>``
    and answers with the metadata record, optionally wrapped in ``data``.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None) -> None:
        self._settings = settings or get_settings()
        if not self._settings.parse_api_url:
            raise ProviderError(code="MISSING_PARSE_API_URL", message="PARSE_API_URL is not set")
        self._session = session or requests.Session()

    def fetch(self, platform: VideoPlatform, url: str) -> Optional[VideoMetadata]:
        try:
            response = self._session.get(
                self._settings.parse_api_url,
                params={"platform": platform.value, "url": url},
                headers={"User-Agent": _USER_AGENT},
                timeout=self._settings.request_timeout_sec,
            )
        except requests.RequestException as e:
            raise ProviderError(code="PARSE_API_UNREACHABLE", message=str(e)) from e
        if response.status_code == 404:
            return None
        data = self._handle_response(response)
        record = data.get("data", data)
        if not isinstance(record, dict) or not record:
            return None
        record.setdefault("platform", platform.value)
        return VideoMetadata.from_dict(record)

    def _handle_response(self, response: requests.Response) -> dict:
        if response.status_code >= 400:
            raise ProviderError(code=f"HTTP_{response.status_code}", message=response.text)
        try:
            data = response.json()
        except ValueError:
            raise ProviderError(code="INVALID_JSON", message=response.text)
        if not isinstance(data, dict):
            raise ProviderError(code="INVALID_JSON", message=json.dumps(data, ensure_ascii=False))
        return data
