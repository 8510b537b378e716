"""Highlight classifier - fixed threshold rules over aggregated stats.

Each category is flagged ``red`` when its rule fires and ``neutral``
otherwise; kill participation additionally has a ``green`` tier. Rank
ordinals follow ``Tier`` (IRON=0 ... CHALLENGER=9, unranked=0).

The thresholds are heuristics, kept literal on purpose: changing one changes
which profiles get flagged.
"""

import logging
from collections.abc import Callable

from lolscout.contracts.common import Severity
from lolscout.contracts.report import (
    HIGHLIGHT_CATEGORIES,
    HighlightInput,
    RankLookup,
    SeasonTotals,
    WindowStats,
)

logger = logging.getLogger(__name__)

DEFAULT_ICON_MAX_ID = 28

_EMERALD = 5
_DIAMOND = 6
_MASTER = 7
_GOLD = 3
_PLATINUM = 4

# Categories whose rule reads the rank ordinal or season totals.
RANK_DEPENDENT = frozenset(
    {
        "totalWinRate",
        "rankedWinRate",
        "multiKills",
        "dpm",
        "cspm",
        "visionScore",
        "rankedGamesPlayed",
    }
)


def _total_win_rate(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (h.season_games >= 30 and h.season_win_rate > 70 and r < _MASTER) or (
        h.season_games >= 50 and h.season_win_rate > 60 and r < _EMERALD
    )


def _ranked_win_rate(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (h.ranked_games >= 10 and h.ranked_win_rate > 70 and r < _MASTER) or (
        h.ranked_games >= 20 and h.ranked_win_rate > 65 and r < _EMERALD
    )


def _profile_icon(h: HighlightInput) -> bool:
    return h.profile_icon_id <= DEFAULT_ICON_MAX_ID


def _flash(h: HighlightInput) -> bool:
    return h.flash_label == "D & F"


def _multi_kills(h: HighlightInput) -> bool:
    return h.multi_kills > 0 and h.rank_ordinal < _DIAMOND


def _dpm(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (r < _GOLD and h.avg_dpm > 650) or (_GOLD <= r < _DIAMOND and h.avg_dpm > 850)


def _cspm(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (r < _GOLD and h.avg_cspm > 7) or (_GOLD <= r < _DIAMOND and h.avg_cspm > 8)


def _vision(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (r < _PLATINUM and h.avg_vision > 50) or (r < _DIAMOND and h.avg_vision > 60)


def _ranked_games_played(h: HighlightInput) -> bool:
    r = h.rank_ordinal
    return (h.total_ranked_games < 50 and r >= _EMERALD) or (
        h.total_ranked_games < 100 and r >= _MASTER
    )


def _champion_pool(h: HighlightInput) -> bool:
    return h.unique_champions <= 5 and h.ranked_games >= 20


_RED_RULES: dict[str, Callable[[HighlightInput], bool]] = {
    "totalWinRate": _total_win_rate,
    "rankedWinRate": _ranked_win_rate,
    "profileIcon": _profile_icon,
    "flash": _flash,
    "multiKills": _multi_kills,
    "dpm": _dpm,
    "cspm": _cspm,
    "visionScore": _vision,
    "rankedGamesPlayed": _ranked_games_played,
    "championPool": _champion_pool,
}


def _kp(h: HighlightInput) -> Severity:
    if h.avg_kp > 75:
        return Severity.RED
    if h.avg_kp > 65:
        return Severity.GREEN
    return Severity.NEUTRAL


def classify_highlights(h: HighlightInput) -> dict[str, Severity]:
    """Map every highlight category to a severity.

    When the rank could not be fetched (``rank_known`` False), rank-dependent
    categories stay neutral instead of being judged against ordinal 0.
    """
    report = {category: Severity.NEUTRAL for category in HIGHLIGHT_CATEGORIES}
    for category, rule in _RED_RULES.items():
        if not h.rank_known and category in RANK_DEPENDENT:
            continue
        if rule(h):
            report[category] = Severity.RED
    report["kp"] = _kp(h)

    flagged = [c for c, s in report.items() if s is Severity.RED]
    if flagged:
        logger.info("Highlights flagged: %s", ", ".join(flagged))
    return report


def build_highlight_input(
    *,
    rank: RankLookup,
    season: SeasonTotals,
    all_games: WindowStats,
    ranked_games: WindowStats,
    profile_icon_id: int,
) -> HighlightInput:
    """Flatten rank, season and window stats into the classifier record.

    Per-game averages come from the ranked window when it holds games and
    from the all-games window otherwise.
    """
    perf = ranked_games if ranked_games.games > 0 else all_games
    return HighlightInput(
        rank_known=rank.status != "fetch_failed",
        rank_ordinal=rank.tier_ordinal,
        season_games=season.games,
        season_win_rate=season.win_rate,
        ranked_games=ranked_games.games,
        ranked_win_rate=ranked_games.win_rate,
        profile_icon_id=profile_icon_id,
        flash_label=perf.flash_label,
        multi_kills=perf.multi_kills,
        avg_dpm=perf.avg_dpm,
        avg_cspm=perf.avg_cspm,
        avg_kp=perf.avg_kp,
        avg_vision=perf.avg_vision,
        unique_champions=perf.unique_champion_count,
        total_ranked_games=season.games,
    )
