"""
Account, summoner, league and mastery payloads from the Riot API.
"""

from pydantic import Field

from .common import APEX_TIERS, RiotPayload, Tier, tier_ordinal


class Account(RiotPayload):
    """Account-V1 lookup result."""

    puuid: str = Field(..., description="Player's PUUID")
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}"


class SummonerProfile(RiotPayload):
    """Summoner-V4 profile."""

    puuid: str
    profile_icon_id: int = Field(..., alias="profileIconId")
    summoner_level: int = Field(..., ge=0, alias="summonerLevel")
    id: str | None = Field(None, description="Encrypted summoner ID (legacy)")


class LeagueEntry(RiotPayload):
    """League/Ranked information for one queue."""

    queue_type: str = Field(..., alias="queueType", description="e.g. RANKED_SOLO_5x5")
    tier: str | None = Field(None, description="IRON to CHALLENGER")
    rank: str | None = Field(None, description="Division within tier")
    league_points: int = Field(0, alias="leaguePoints")
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)

    @property
    def tier_ordinal(self) -> int:
        return tier_ordinal(self.tier)

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Calculate win rate percentage."""
        if self.games == 0:
            return 0.0
        return (self.wins / self.games) * 100

    @property
    def full_rank(self) -> str:
        """Get full rank string (e.g., 'GOLD II')."""
        if not self.tier:
            return "UNRANKED"
        tier = self.tier.upper()
        if tier in {t.value for t in APEX_TIERS} or not self.rank:
            return tier
        return f"{tier} {self.rank}"


class MasteryEntry(RiotPayload):
    """Champion-Mastery-V4 entry."""

    champion_id: int = Field(..., alias="championId")
    champion_level: int = Field(0, ge=0, alias="championLevel")
    champion_points: int = Field(0, ge=0, alias="championPoints")


__all__ = ["Account", "SummonerProfile", "LeagueEntry", "MasteryEntry", "Tier"]
