"""Unit tests for settings loading."""

import pytest

from competitive_companion.config import DEFAULT_PORTS, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "COMPANION_PORTS",
        "COMPANION_CUSTOM_PORTS",
        "COMPANION_HTTP_TIMEOUT",
        "COMPANION_DELIVERY_TIMEOUT",
        "COMPANION_GRANTED_ORIGINS",
        "COMPANION_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("competitive_companion.config.load_dotenv", lambda: False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.ports == DEFAULT_PORTS
    assert settings.custom_ports == ()
    assert settings.log_level == "INFO"
    assert settings.all_ports == DEFAULT_PORTS


def test_custom_ports_are_appended_once(monkeypatch):
    monkeypatch.setenv("COMPANION_CUSTOM_PORTS", "9000, 1327,,9001")

    settings = Settings.from_env()

    assert settings.custom_ports == (9000, 1327, 9001)
    assert settings.all_ports == (*DEFAULT_PORTS, 9000, 9001)


def test_overrides(monkeypatch):
    monkeypatch.setenv("COMPANION_PORTS", "10045")
    monkeypatch.setenv("COMPANION_DELIVERY_TIMEOUT", "1.5")
    monkeypatch.setenv("COMPANION_GRANTED_ORIGINS", "https://a.com/*, https://b.com/*")
    monkeypatch.setenv("COMPANION_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.ports == (10045,)
    assert settings.delivery_timeout == 1.5
    assert settings.granted_origins == ("https://a.com/*", "https://b.com/*")
    assert settings.log_level == "DEBUG"


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("COMPANION_CUSTOM_PORTS", "70000")

    with pytest.raises(ValueError):
        Settings.from_env()
