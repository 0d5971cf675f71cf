from smart_prompt.config import Settings, get_settings, reset_settings


def test_defaults_without_environment():
    settings = get_settings()
    assert settings.api_key == ""
    assert settings.text_temperature == 0.3
    assert settings.image_temperature == 0.5
    assert settings.text_max_tokens == 800
    assert settings.image_max_tokens == 1000
    assert settings.language == "zh"
    assert settings.use_ai is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SMART_PROMPT_API_KEY", " sk-live ")
    monkeypatch.setenv("TEXT_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("TEXT_TEMPERATURE", "0.1")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "12")
    monkeypatch.setenv("PROMPT_LANGUAGE", "EN")
    monkeypatch.setenv("USE_AI", "off")
    reset_settings()

    settings = get_settings()
    assert settings.api_key == "sk-live"
    assert settings.text_model == "gpt-4o-mini"
    assert settings.text_temperature == 0.1
    assert settings.request_timeout_sec == 12
    assert settings.language == "en"
    assert settings.use_ai is False


def test_dashscope_key_is_accepted(monkeypatch):
    monkeypatch.setenv("DASHSCOPE_API_KEY", "sk-dash")
    reset_settings()
    assert get_settings().api_key == "sk-dash"


def test_malformed_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("TEXT_MAX_TOKENS", "lots")
    monkeypatch.setenv("IMAGE_TEMPERATURE", "warm")
    reset_settings()
    settings = get_settings()
    assert settings.text_max_tokens == 800
    assert settings.image_temperature == 0.5


def test_settings_singleton_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("TEXT_MODEL", "changed")
    assert get_settings() is first
    reset_settings()
    assert get_settings().text_model == "changed"


def test_validate_reports_problems():
    warnings = Settings(api_key="sk-your-key", prompt_language="fr").validate()
    assert len(warnings) == 3
    assert Settings(api_key="sk-real", parse_api_url="https://p").validate() == []
    assert Settings(prompt_language="fr").language == "zh"
