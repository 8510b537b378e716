"""
Match-V5 detail payloads.

Only the fields consumed by the aggregation core are modelled. Optional
upstream fields are defaulted here, at the parsing boundary, so the core can
do arithmetic without None checks.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .common import RiotPayload

UNKNOWN_RIOT_ID = "undefined"


class Participant(RiotPayload):
    """Participant (player) information in a match."""

    # Identity
    puuid: str
    team_id: int = Field(..., alias="teamId", description="100 (blue) or 200 (red)")
    riot_id_game_name: str | None = Field(
        None, validation_alias=AliasChoices("riotIdGameName", "riot_id_game_name")
    )
    riot_id_tag_line: str | None = Field(
        None,
        validation_alias=AliasChoices("riotIdTagline", "riotIdTagLine", "riot_id_tag_line"),
    )

    # Champion and spells
    champion_id: int = Field(0, alias="championId")
    champion_name: str = Field("", alias="championName")
    summoner1_id: int = Field(0, alias="summoner1Id")
    summoner2_id: int = Field(0, alias="summoner2Id")

    # Core stats
    win: bool = False
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    quadra_kills: int = Field(0, ge=0, alias="quadraKills")
    penta_kills: int = Field(0, ge=0, alias="pentaKills")
    total_damage_dealt_to_champions: float = Field(
        0, ge=0, alias="totalDamageDealtToChampions"
    )
    total_minions_killed: float = Field(0, ge=0, alias="totalMinionsKilled")
    vision_score: float = Field(0, ge=0, alias="visionScore")

    @field_validator(
        "kills",
        "deaths",
        "assists",
        "quadra_kills",
        "penta_kills",
        "total_damage_dealt_to_champions",
        "total_minions_killed",
        "vision_score",
        mode="before",
    )
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def riot_id(self) -> str | None:
        """'name#tag', or None when the upstream left either half unknown."""
        name = self.riot_id_game_name
        tag = self.riot_id_tag_line
        if not name or not tag or UNKNOWN_RIOT_ID in (name, tag):
            return None
        return f"{name}#{tag}"


class ObjectiveCount(RiotPayload):
    first: bool = False
    kills: int = Field(0, ge=0)


class Objectives(RiotPayload):
    champion: ObjectiveCount = Field(default_factory=ObjectiveCount)


class Team(RiotPayload):
    """Team information in a match."""

    team_id: int = Field(..., alias="teamId")
    win: bool = False
    objectives: Objectives = Field(default_factory=Objectives)

    @field_validator("objectives", mode="before")
    @classmethod
    def _missing_objectives(cls, value: Any) -> Any:
        return {} if value is None else value


class MatchInfo(RiotPayload):
    game_duration: int = Field(0, ge=0, alias="gameDuration", description="Seconds")
    queue_id: int = Field(0, alias="queueId")
    game_creation: int | None = Field(None, alias="gameCreation")
    game_mode: str | None = Field(None, alias="gameMode")
    participants: list[Participant] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)

    @property
    def duration_minutes(self) -> float:
        return self.game_duration / 60

    def find_participant(self, puuid: str) -> Participant | None:
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def team_kills(self, team_id: int) -> int:
        """Champion kills credited to a team; 0 when the team block is absent."""
        for team in self.teams:
            if team.team_id == team_id:
                return team.objectives.champion.kills
        return 0

    def teammates_of(self, player: Participant) -> list[Participant]:
        return [
            p for p in self.participants if p.team_id == player.team_id and p.puuid != player.puuid
        ]


class MatchMetadata(RiotPayload):
    match_id: str = Field(..., alias="matchId")
    participants: list[str] = Field(default_factory=list)


class MatchDTO(RiotPayload):
    """Full Match-V5 detail record."""

    metadata: MatchMetadata
    info: MatchInfo

    @property
    def match_id(self) -> str:
        return self.metadata.match_id
