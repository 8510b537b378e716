"""Settings loading from the environment."""

from typing import Any

import pytest
from pydantic import ValidationError

from lolscout.config.settings import Settings


def test_defaults(monkeypatch: Any) -> None:
    monkeypatch.delenv("RIOT_API_KEY", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    settings = Settings(_env_file=None)

    assert settings.riot_api_key is None
    assert settings.http_timeout_seconds == 15.0
    assert settings.match_window_size == 20
    assert settings.ranked_queue_ids == [420, 440]
    assert settings.min_game_duration_seconds == 300
    assert settings.tracked_summoner_spell_id == 4
    assert settings.duo_min_games == 2
    assert settings.duo_ranked_only is False
    assert settings.server_port == 3000
    assert settings.cors_allow_origin == "*"
    assert settings.is_development


def test_environment_overrides(monkeypatch: Any) -> None:
    monkeypatch.setenv("RIOT_API_KEY", "RGAPI-env")
    monkeypatch.setenv("RANKED_QUEUE_IDS", "[420]")
    monkeypatch.setenv("DUO_RANKED_ONLY", "true")
    monkeypatch.setenv("APP_ENV", "production")

    settings = Settings(_env_file=None)

    assert settings.riot_api_key == "RGAPI-env"
    assert settings.ranked_queue_ids == [420]
    assert settings.duo_ranked_only is True
    assert settings.is_production


def test_match_window_bounds(monkeypatch: Any) -> None:
    monkeypatch.setenv("MATCH_WINDOW_SIZE", "101")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
