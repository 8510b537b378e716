"""Rank selection across ranked queue entries.

Pure functions; no I/O.
"""

from collections.abc import Iterable

from lolscout.contracts.common import queue_label
from lolscout.contracts.report import RankLookup, SeasonTotals
from lolscout.contracts.summoner import LeagueEntry

_QUEUE_TYPE_LABELS = {
    "RANKED_SOLO_5x5": queue_label(420),
    "RANKED_FLEX_SR": queue_label(440),
}


def select_rank(
    entries: Iterable[LeagueEntry] | None, failure_reason: str | None = None
) -> RankLookup:
    """Pick the representative rank among a player's league entries.

    Only solo/duo and flex entries are considered. The entry with the
    strictly highest tier wins; ties keep the first entry seen. Divisions
    and LP are not compared.

    Args:
        entries: League entries, or None when the rank fetch failed
        failure_reason: Optional message describing the fetch failure

    Returns:
        RankLookup tagged ``ranked``, ``unranked`` or ``fetch_failed``
    """
    if entries is None:
        return RankLookup(status="fetch_failed", reason=failure_reason or "rank lookup failed")

    best: LeagueEntry | None = None
    for entry in entries:
        if entry.queue_type not in _QUEUE_TYPE_LABELS:
            continue
        if best is None or entry.tier_ordinal > best.tier_ordinal:
            best = entry

    if best is None:
        return RankLookup(status="unranked")

    return RankLookup(
        status="ranked",
        entry=best,
        queue_label=_QUEUE_TYPE_LABELS[best.queue_type],
    )


def season_totals(rank: RankLookup) -> SeasonTotals:
    """Season wins/losses of the selected entry; zeroed when there is none."""
    if rank.entry is None:
        return SeasonTotals()
    entry = rank.entry
    return SeasonTotals(
        wins=entry.wins,
        losses=entry.losses,
        games=entry.games,
        win_rate=entry.win_rate,
    )
