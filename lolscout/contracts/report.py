"""
Outgoing analysis report contracts.

The report is the only "protocol" lolscout exposes: the web UI pattern-matches
on this shape, so field names are part of the public contract.
"""

from typing import Literal

from pydantic import Field

from .common import BaseContract, Severity
from .summoner import LeagueEntry

HIGHLIGHT_CATEGORIES: tuple[str, ...] = (
    "totalWinRate",
    "rankedWinRate",
    "profileIcon",
    "flash",
    "multiKills",
    "dpm",
    "cspm",
    "kp",
    "visionScore",
    "rankedGamesPlayed",
    "championPool",
)

FlashLabel = Literal["None", "D", "F", "D & F"]


class WindowStats(BaseContract):
    """Aggregated statistics over one window of valid matches.

    Every average and rate is 0 when the window holds no games.
    """

    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    win_rate: float = Field(0.0, ge=0, le=100)
    avg_kills: float = Field(0.0, ge=0)
    avg_deaths: float = Field(0.0, ge=0)
    avg_assists: float = Field(0.0, ge=0)
    kda: float = Field(0.0, ge=0)
    avg_dpm: float = Field(0.0, ge=0)
    avg_cspm: float = Field(0.0, ge=0)
    avg_kp: float = Field(0.0, ge=0, le=100)
    avg_vision: float = Field(0.0, ge=0)
    multi_kills: int = Field(0, ge=0)
    unique_champions: list[str] = Field(default_factory=list)
    flash_slot1: int = Field(0, ge=0)
    flash_slot2: int = Field(0, ge=0)
    flash_label: FlashLabel = "None"

    @property
    def unique_champion_count(self) -> int:
        return len(self.unique_champions)


class DuoPartner(BaseContract):
    riot_id: str
    games: int = Field(..., ge=1)


class MasteryRow(BaseContract):
    champion_id: int
    name: str
    level: int = Field(0, ge=0)
    points: int = Field(0, ge=0)


class RankLookup(BaseContract):
    """Tagged rank result: a selected entry, genuinely unranked, or fetch failure."""

    status: Literal["ranked", "unranked", "fetch_failed"]
    entry: LeagueEntry | None = None
    queue_label: str | None = None
    reason: str | None = None

    @property
    def tier_ordinal(self) -> int:
        return self.entry.tier_ordinal if self.entry else 0

    @property
    def display(self) -> str:
        if self.status == "fetch_failed":
            return "UNKNOWN"
        if self.entry is None:
            return "UNRANKED"
        return self.entry.full_rank


class SeasonTotals(BaseContract):
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    games: int = Field(0, ge=0)
    win_rate: float = Field(0.0, ge=0, le=100)


class HighlightInput(BaseContract):
    """Flat record consumed by the highlight classifier."""

    rank_known: bool = True
    rank_ordinal: int = Field(0, ge=0, le=9)
    season_games: int = Field(0, ge=0)
    season_win_rate: float = Field(0.0, ge=0, le=100)
    ranked_games: int = Field(0, ge=0)
    ranked_win_rate: float = Field(0.0, ge=0, le=100)
    profile_icon_id: int = 0
    flash_label: FlashLabel = "None"
    multi_kills: int = Field(0, ge=0)
    avg_dpm: float = Field(0.0, ge=0)
    avg_cspm: float = Field(0.0, ge=0)
    avg_kp: float = Field(0.0, ge=0, le=100)
    avg_vision: float = Field(0.0, ge=0)
    unique_champions: int = Field(0, ge=0)
    total_ranked_games: int = Field(0, ge=0)


class MatchHistoryEntry(BaseContract):
    match_id: str
    champion_name: str
    win: bool
    kills: int
    deaths: int
    assists: int
    kda: float
    queue_id: int
    queue_label: str
    duration_minutes: int
    champion_icon_url: str | None = None


class AnalysisReport(BaseContract):
    riot_id: str
    puuid: str
    platform: str
    account_level: int
    profile_icon_id: int
    profile_icon_url: str | None = None
    icon_is_default: bool
    rank: RankLookup
    rank_display: str
    season: SeasonTotals
    all_games: WindowStats
    ranked_games: WindowStats
    duo_partners: list[DuoPartner] = Field(default_factory=list)
    mastery: list[MasteryRow] = Field(default_factory=list)
    highlights: dict[str, Severity] = Field(default_factory=dict)
    match_history: list[MatchHistoryEntry] = Field(default_factory=list)
