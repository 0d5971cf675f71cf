import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from smart_prompt.config import reset_settings  # noqa: E402

_ENV_KEYS = (
    "SMART_PROMPT_API_KEY",
    "DASHSCOPE_API_KEY",
    "LLM_BASE_URL",
    "TEXT_MODEL",
    "VISION_MODEL",
    "TEXT_TEMPERATURE",
    "IMAGE_TEMPERATURE",
    "TEXT_MAX_TOKENS",
    "IMAGE_MAX_TOKENS",
    "PARSE_API_URL",
    "REQUEST_TIMEOUT_SEC",
    "PROMPT_LANGUAGE",
    "LOG_LEVEL",
    "USE_AI",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks the first item."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def first_choice():
    return FirstChoice()
