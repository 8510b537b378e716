"""Profile statistics core - pure aggregation and classification.

Components:
1. Rank selection (best tier across ranked queues)
2. Match window aggregation (all valid games / ranked-only games)
3. Duo partner tally
4. Mastery merge against the champion catalog
5. Highlight classification (fixed threshold rules)
"""

from lolscout.core.stats.aggregator import (
    PlayerGame,
    WindowAggregation,
    aggregate_windows,
    kda_ratio,
    kill_participation,
)
from lolscout.core.stats.duo import tally_duo_partners
from lolscout.core.stats.highlights import build_highlight_input, classify_highlights
from lolscout.core.stats.mastery import MasterySort, merge_mastery, sort_mastery
from lolscout.core.stats.rank import season_totals, select_rank

__all__ = [
    "MasterySort",
    "PlayerGame",
    "WindowAggregation",
    "aggregate_windows",
    "build_highlight_input",
    "classify_highlights",
    "kda_ratio",
    "kill_participation",
    "merge_mastery",
    "season_totals",
    "select_rank",
    "sort_mastery",
    "tally_duo_partners",
]
