import os

import pytest

from event_sync.config import get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "EVENT_SYNC_TOKEN_FILE",
        "EVENT_SYNC_LOG_LEVEL",
        "EVENT_SYNC_LOG_FORMAT",
        "EVENT_SYNC_HTTP_TIMEOUT",
        "EVENT_SYNC_METRICS_FILE",
        "EVENT_SYNC_LOAD_DOTENV",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()

    assert settings.token_file is None
    assert settings.log_level == "INFO"
    assert settings.log_format == "text"
    assert settings.http_timeout == 60.0
    assert settings.metrics_file is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("EVENT_SYNC_TOKEN_FILE", "/tmp/token.json")
    monkeypatch.setenv("EVENT_SYNC_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("EVENT_SYNC_LOG_FORMAT", "json")

    settings = get_settings()

    assert settings.token_file == "/tmp/token.json"
    assert settings.http_timeout == 5.5
    assert settings.log_format == "json"


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("EVENT_SYNC_HTTP_TIMEOUT", "soon")

    with pytest.raises(ValueError):
        get_settings()


def test_dotenv_is_opt_in(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("EVENT_SYNC_LOG_LEVEL=DEBUG\n")
    monkeypatch.chdir(tmp_path)

    assert get_settings().log_level == "INFO"

    monkeypatch.setenv("EVENT_SYNC_LOAD_DOTENV", "1")
    try:
        assert get_settings().log_level == "DEBUG"
    finally:
        os.environ.pop("EVENT_SYNC_LOG_LEVEL", None)
