from validation.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("VALIDATION_LOG_LEVEL", "VALIDATION_LOG_JSON", "VALIDATION_DERIVE_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_JSON is False
    assert settings.DERIVE_DEBUG is False


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("VALIDATION_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("VALIDATION_LOG_JSON", "true")
    monkeypatch.setenv("VALIDATION_DERIVE_DEBUG", "1")
    settings = get_settings()
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_JSON is True
    assert settings.DERIVE_DEBUG is True


def test_unprefixed_environment_ignored(monkeypatch):
    monkeypatch.delenv("VALIDATION_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert Settings(_env_file=None).LOG_LEVEL == "INFO"


def test_settings_are_cached():
    assert get_settings() is get_settings()
