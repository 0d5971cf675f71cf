import json
from types import SimpleNamespace

import pytest
import requests
from openai import OpenAIError

from smart_prompt.config import Settings
from smart_prompt.mock_provider import MockProvider
from smart_prompt.openai_provider import OpenAICompatibleProvider
from smart_prompt.parse_api_provider import ParseApiMetadataProvider
from smart_prompt.provider_base import ProviderError
from smart_prompt.video_metadata import VideoPlatform


class _FakeCompletions:
    def __init__(self, content="ok", error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_openai_provider_text_call_uses_settings():
    completions = _FakeCompletions(content='{"subject": "x"}')
    settings = Settings(api_key="k", text_model="qwen-test", text_temperature=0.2, text_max_tokens=123)
    provider = OpenAICompatibleProvider(settings, client=_client(completions))

    assert provider.complete("sys", "hello") == '{"subject": "x"}'
    assert completions.kwargs["model"] == "qwen-test"
    assert completions.kwargs["temperature"] == 0.2
    assert completions.kwargs["max_tokens"] == 123
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hello"},
    ]


def test_openai_provider_explicit_sampling_overrides():
    completions = _FakeCompletions()
    provider = OpenAICompatibleProvider(Settings(api_key="k"), client=_client(completions))
    provider.complete("sys", "hi", temperature=0.9, max_tokens=10)
    assert completions.kwargs["temperature"] == 0.9
    assert completions.kwargs["max_tokens"] == 10


def test_openai_provider_vision_message_shape():
    completions = _FakeCompletions(content="caption")
    settings = Settings(api_key="k", vision_model="qwen-vl-test")
    provider = OpenAICompatibleProvider(settings, client=_client(completions))

    assert provider.describe_image("", "describe", "data:image/png;base64,AAA") == "caption"
    messages = completions.kwargs["messages"]
    assert completions.kwargs["model"] == "qwen-vl-test"
    assert len(messages) == 1
    assert messages[0]["content"][1] == {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAA"}}


def test_openai_provider_wraps_client_errors():
    provider = OpenAICompatibleProvider(Settings(api_key="k"), client=_client(_FakeCompletions(error=OpenAIError("boom"))))
    with pytest.raises(ProviderError) as exc_info:
        provider.complete("sys", "hi")
    assert exc_info.value.code == "LLM_REQUEST_FAILED"


def test_openai_provider_empty_choices():
    provider = OpenAICompatibleProvider(Settings(api_key="k"), client=_client(_FakeCompletions(choices=False)))
    with pytest.raises(ProviderError) as exc_info:
        provider.complete("sys", "hi")
    assert exc_info.value.code == "LLM_EMPTY_RESPONSE"


def test_openai_provider_requires_api_key():
    with pytest.raises(ProviderError) as exc_info:
        OpenAICompatibleProvider(Settings(api_key=""))
    assert exc_info.value.code == "MISSING_API_KEY"


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def _parse_settings():
    return Settings(parse_api_url="https://parse.example/api", request_timeout_sec=5)


def test_parse_api_provider_maps_wrapped_record():
    session = _FakeSession(_FakeResponse(payload={"data": {
        "title": "夜市",
        "description": "street food tour",
        "author": {"name": "阿强"},
        "tags": ["美食"],
    }}))
    provider = ParseApiMetadataProvider(_parse_settings(), session=session)

    meta = provider.fetch(VideoPlatform.DOUYIN, "https://v.douyin.com/x/")

    assert meta.platform is VideoPlatform.DOUYIN
    assert meta.author.name == "阿强"
    assert meta.tags == ["美食"]
    url, kwargs = session.calls[0]
    assert url == "https://parse.example/api"
    assert kwargs["params"] == {"platform": "douyin", "url": "https://v.douyin.com/x/"}
    assert kwargs["timeout"] == 5


def test_parse_api_provider_not_found():
    provider = ParseApiMetadataProvider(_parse_settings(), session=_FakeSession(_FakeResponse(404, text="nope")))
    assert provider.fetch(VideoPlatform.BILIBILI, "https://b23.tv/x") is None

    empty = ParseApiMetadataProvider(_parse_settings(), session=_FakeSession(_FakeResponse(payload={"data": {}})))
    assert empty.fetch(VideoPlatform.BILIBILI, "https://b23.tv/x") is None


@pytest.mark.parametrize("session, code", [
    (_FakeSession(_FakeResponse(500, text="upstream down")), "HTTP_500"),
    (_FakeSession(_FakeResponse(200, payload=None, text="<html>")), "INVALID_JSON"),
    (_FakeSession(_FakeResponse(200, payload=["not", "a", "dict"])), "INVALID_JSON"),
    (_FakeSession(error=requests.ConnectionError("refused")), "PARSE_API_UNREACHABLE"),
])
def test_parse_api_provider_errors(session, code):
    provider = ParseApiMetadataProvider(_parse_settings(), session=session)
    with pytest.raises(ProviderError) as exc_info:
        provider.fetch(VideoPlatform.WEIBO, "https://weibo.com/tv/1")
    assert exc_info.value.code == code


def test_parse_api_provider_requires_url():
    with pytest.raises(ProviderError):
        ParseApiMetadataProvider(Settings(parse_api_url=""))


def test_mock_provider_answers_both_schemas():
    mock = MockProvider()
    assert "nanoBanana" in json.loads(mock.complete('{"nanoBanana": ""}', "a cat"))
    assert json.loads(mock.complete("extract", "a cat"))["subject"] == "a cat"
    assert json.loads(mock.describe_image("sys", "describe", "data:"))["caption"]
