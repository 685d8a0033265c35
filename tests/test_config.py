"""Settings loading and logging setup."""

import logging

from gemini_relay import Settings
from gemini_relay.logging_utils import configure_logging


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "GOOGLE_API_KEY", "GEMINI_API_BASE_URL", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.port == 3000
    assert settings.google_api_key == ""
    assert settings.gemini_api_base_url == "https://generativelanguage.googleapis.com/v1beta"
    assert settings.request_timeout is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
    monkeypatch.setenv("REQUEST_TIMEOUT", "30")

    settings = Settings()

    assert settings.port == 8080
    assert settings.google_api_key == "from-env"
    assert settings.request_timeout == 30.0


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    (tmp_path / ".env").write_text("GOOGLE_API_KEY=from-dotenv\n")

    assert Settings().google_api_key == "from-dotenv"


def test_configure_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before = len(root.handlers)
    previous_level = root.level

    configure_logging("debug")
    configure_logging("debug")

    try:
        assert len(root.handlers) == before + 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            if getattr(handler, "_gemini_relay_managed_handler", False):
                root.removeHandler(handler)
        root.setLevel(previous_level)
