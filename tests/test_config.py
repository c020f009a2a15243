"""Tests for configuration loading and validation."""

import pytest

from bot.config import Config, application_id_from_token, config
from utils.error_handler import ConfigurationError

VALID_TOKEN = "MTIzNDU2Nzg5MDEyMzQ1Njc4.GhIjKl.test-token"


def test_loaded_from_environment():
    assert config.DISCORD_TOKEN == VALID_TOKEN
    assert config.WEATHER_API_KEY == "test-weather-key"
    assert config.PREFIX == "<"
    assert config.KEEP_ALIVE is False


def test_from_env_defaults(monkeypatch):
    monkeypatch.delenv("BOT_PREFIX", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = Config.from_env()
    assert settings.PREFIX == "<"
    assert settings.PORT == 11186


def test_application_id_from_token():
    assert application_id_from_token(VALID_TOKEN) == 123456789012345678
    # Unpadded segment
    assert application_id_from_token("MTIzNDU2Nzg5MA.x.y") == 1234567890


@pytest.mark.parametrize("token", ["!!!.x.y", "bm90LWRpZ2l0cw.x.y", "a"])
def test_malformed_token(token):
    with pytest.raises(ConfigurationError):
        application_id_from_token(token)


def test_validate_accepts_complete_config():
    Config(DISCORD_TOKEN=VALID_TOKEN, WEATHER_API_KEY="key").validate()


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"DISCORD_TOKEN": "", "WEATHER_API_KEY": "key"}, "DISCORD_TOKEN"),
        ({"DISCORD_TOKEN": VALID_TOKEN, "WEATHER_API_KEY": ""}, "WEATHER_API_KEY"),
        ({"DISCORD_TOKEN": "garbage!", "WEATHER_API_KEY": "key"}, "malformed"),
    ],
)
def test_validate_rejects(kwargs, message):
    with pytest.raises(ConfigurationError, match=message):
        Config(**kwargs).validate()
