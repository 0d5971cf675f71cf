"""Smart Prompt: configuration loader.

Non-frozen dataclass so the CLI and tests can override values at runtime.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_ROOT / ".env", override=False)

SUPPORTED_LANGUAGES = ("zh", "en")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_bool(key: str, default: bool = False) -> bool:
    v = _env(key, str(default)).lower()
    return v in ("1", "true", "yes", "on")


def _env_int(key: str, default: int = 0) -> int:
    try:
        return int(_env(key, str(default)))
    except ValueError:
        return default


def _env_float(key: str, default: float = 0.0) -> float:
    try:
        return float(_env(key, str(default)))
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings, mutable at runtime."""

    # ── LLM credentials (any OpenAI-compatible endpoint) ──
    api_key: str = ""
    base_url: str = "https://dashscope.aliyuncs.com/compatible-mode/v1"
    text_model: str = "qwen-plus"
    vision_model: str = "qwen-vl-plus"

    # ── Sampling ──
    text_temperature: float = 0.3
    image_temperature: float = 0.5
    text_max_tokens: int = 800
    image_max_tokens: int = 1000

    # ── Video metadata service ──
    parse_api_url: str = ""

    # ── Tuning ──
    request_timeout_sec: int = 30
    prompt_language: str = "zh"
    log_level: str = "INFO"
    use_ai: bool = True

    def validate(self) -> list[str]:
        """Return list of validation warnings (empty = OK)."""
        warnings = []
        if self.use_ai and (not self.api_key or self.api_key.startswith("sk-your")):
            warnings.append("SMART_PROMPT_API_KEY is not set; prompts fall back to local rendering")
        if self.prompt_language not in SUPPORTED_LANGUAGES:
            warnings.append(
                f"PROMPT_LANGUAGE={self.prompt_language!r} is not supported, using 'zh'"
            )
        if not self.parse_api_url:
            warnings.append("PARSE_API_URL is not set; video links cannot be resolved")
        return warnings

    @property
    def language(self) -> str:
        return self.prompt_language if self.prompt_language in SUPPORTED_LANGUAGES else "zh"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return singleton Settings, loading from env on first call."""
    global _settings
    if _settings is None:
        _settings = Settings(
            api_key=_env("SMART_PROMPT_API_KEY") or _env("DASHSCOPE_API_KEY"),
            base_url=_env("LLM_BASE_URL", "https://dashscope.aliyuncs.com/compatible-mode/v1"),
            text_model=_env("TEXT_MODEL", "qwen-plus"),
            vision_model=_env("VISION_MODEL", "qwen-vl-plus"),
            text_temperature=_env_float("TEXT_TEMPERATURE", 0.3),
            image_temperature=_env_float("IMAGE_TEMPERATURE", 0.5),
            text_max_tokens=_env_int("TEXT_MAX_TOKENS", 800),
            image_max_tokens=_env_int("IMAGE_MAX_TOKENS", 1000),
            parse_api_url=_env("PARSE_API_URL"),
            request_timeout_sec=_env_int("REQUEST_TIMEOUT_SEC", 30),
            prompt_language=_env("PROMPT_LANGUAGE", "zh").lower(),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            use_ai=_env_bool("USE_AI", True),
        )
    return _settings


def reset_settings() -> None:
    """Force re-load on next get_settings(), useful for tests."""
    global _settings
    _settings = None
