"""Pytest configuration and shared fixtures for lolscout tests.

Match payloads are built as raw Match-V5 style dicts (camelCase keys) and
parsed through the contracts, so fixtures exercise the same boundary the
adapter feeds in production.
"""

from collections.abc import Callable
from typing import Any

import pytest

from lolscout.config.settings import Settings
from lolscout.contracts.match import MatchDTO

PLAYER_PUUID = "player-puuid-0001"


def participant_payload(
    puuid: str = PLAYER_PUUID,
    *,
    team_id: int = 100,
    game_name: str | None = None,
    tag_line: str | None = "NA1",
    champion_id: int = 1,
    champion_name: str = "Annie",
    summoner1_id: int = 14,
    summoner2_id: int = 4,
    win: bool = True,
    kills: int = 0,
    deaths: int = 0,
    assists: int = 0,
    quadra_kills: int = 0,
    penta_kills: int = 0,
    damage: float = 0,
    minions: float = 0,
    vision_score: float | None = 0,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "puuid": puuid,
        "teamId": team_id,
        "riotIdGameName": game_name if game_name is not None else puuid,
        "riotIdTagline": tag_line,
        "championId": champion_id,
        "championName": champion_name,
        "summoner1Id": summoner1_id,
        "summoner2Id": summoner2_id,
        "win": win,
        "kills": kills,
        "deaths": deaths,
        "assists": assists,
        "quadraKills": quadra_kills,
        "pentaKills": penta_kills,
        "totalDamageDealtToChampions": damage,
        "totalMinionsKilled": minions,
    }
    if vision_score is not None:
        payload["visionScore"] = vision_score
    return payload


def match_payload(
    match_id: str = "NA1_1",
    *,
    participants: list[dict[str, Any]] | None = None,
    duration: int = 1800,
    queue_id: int = 420,
    team_kills: dict[int, int] | None = None,
) -> dict[str, Any]:
    """Raw Match-V5 detail dict; team kills default to 0 for both sides."""
    team_kills = team_kills or {}
    return {
        "metadata": {"matchId": match_id, "participants": []},
        "info": {
            "gameDuration": duration,
            "queueId": queue_id,
            "gameMode": "CLASSIC",
            "participants": participants if participants is not None else [participant_payload()],
            "teams": [
                {
                    "teamId": team_id,
                    "win": team_id == 100,
                    "objectives": {"champion": {"first": False, "kills": team_kills.get(team_id, 0)}},
                }
                for team_id in (100, 200)
            ],
        },
    }


@pytest.fixture
def make_participant() -> Callable[..., dict[str, Any]]:
    return participant_payload


@pytest.fixture
def make_match() -> Callable[..., MatchDTO]:
    """Factory returning a parsed MatchDTO."""

    def _make(*args: Any, **kwargs: Any) -> MatchDTO:
        return MatchDTO.model_validate(match_payload(*args, **kwargs))

    return _make


@pytest.fixture
def make_match_payload() -> Callable[..., dict[str, Any]]:
    return match_payload


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        riot_api_key="RGAPI-test-key",
        analysis_deadline_seconds=5,
        match_fetch_concurrency=3,
    )
