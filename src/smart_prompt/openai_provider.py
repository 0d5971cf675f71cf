"""Smart Prompt: OpenAI-compatible text and vision provider.

Works against any endpoint that speaks the chat-completions protocol
(DashScope compatible mode by default).
"""

from __future__ import annotations

from typing import Any, Optional

from openai import OpenAI, OpenAIError

from .config import Settings, get_settings
from .provider_base import ProviderError, TextCompletionProvider, VisionCompletionProvider


class OpenAICompatibleProvider(TextCompletionProvider, VisionCompletionProvider):
    def __init__(self, settings: Optional[Settings] = None, client: Optional[Any] = None) -> None:
        self._settings = settings or get_settings()
        if client is None:
            if not self._settings.api_key:
                raise ProviderError(code="MISSING_API_KEY", message="SMART_PROMPT_API_KEY is not set")
            client = OpenAI(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
                timeout=self._settings.request_timeout_sec,
            )
        self._client = client

    def complete(self, system: str, user: str, *, temperature: Optional[float] = None,
                 max_tokens: Optional[int] = None) -> str:
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        return self._chat(
            self._settings.text_model,
            messages,
            temperature=self._settings.text_temperature if temperature is None else temperature,
            max_tokens=self._settings.text_max_tokens if max_tokens is None else max_tokens,
        )

    def describe_image(self, system: str, prompt: str, image_url: str) -> str:
        messages: list[dict] = [{"role": "system", "content": system}] if system else []
        messages.append({
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        })
        return self._chat(
            self._settings.vision_model,
            messages,
            temperature=self._settings.text_temperature,
            max_tokens=self._settings.text_max_tokens,
        )

    def _chat(self, model: str, messages: list[dict], *, temperature: float, max_tokens: int) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            raise ProviderError(code="LLM_REQUEST_FAILED", message=str(e)) from e
        if not response.choices:
            raise ProviderError(code="LLM_EMPTY_RESPONSE", message=f"{model} returned no choices")
        return response.choices[0].message.content or ""
