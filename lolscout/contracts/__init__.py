"""Contract models for data validation."""

from .common import (
    Platform,
    Queue,
    Region,
    Severity,
    Tier,
    account_route,
    queue_label,
    regional_route,
    tier_ordinal,
)
from .match import UNKNOWN_RIOT_ID, MatchDTO, MatchInfo, Participant, Team
from .report import (
    HIGHLIGHT_CATEGORIES,
    AnalysisReport,
    DuoPartner,
    HighlightInput,
    MasteryRow,
    MatchHistoryEntry,
    RankLookup,
    SeasonTotals,
    WindowStats,
)
from .summoner import Account, LeagueEntry, MasteryEntry, SummonerProfile

__all__ = [
    "Account",
    "AnalysisReport",
    "DuoPartner",
    "HIGHLIGHT_CATEGORIES",
    "HighlightInput",
    "LeagueEntry",
    "MasteryEntry",
    "MasteryRow",
    "MatchDTO",
    "MatchHistoryEntry",
    "MatchInfo",
    "Participant",
    "Platform",
    "Queue",
    "RankLookup",
    "Region",
    "SeasonTotals",
    "Severity",
    "SummonerProfile",
    "Team",
    "Tier",
    "UNKNOWN_RIOT_ID",
    "WindowStats",
    "account_route",
    "queue_label",
    "regional_route",
    "tier_ordinal",
]
