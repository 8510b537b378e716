"""Champion mastery merge against the full champion catalog."""

from collections.abc import Iterable, Mapping
from enum import Enum

from lolscout.contracts.report import MasteryRow
from lolscout.contracts.summoner import MasteryEntry


class MasterySort(str, Enum):
    """Display orderings for the mastery list, in cycle order."""

    POINTS_DESC = "points_desc"
    POINTS_ASC = "points_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"

    def next(self) -> "MasterySort":
        order = list(MasterySort)
        return order[(order.index(self) + 1) % len(order)]


def sort_mastery(rows: Iterable[MasteryRow], order: MasterySort = MasterySort.POINTS_DESC) -> list[MasteryRow]:
    if order is MasterySort.POINTS_DESC:
        return sorted(rows, key=lambda r: r.points, reverse=True)
    if order is MasterySort.POINTS_ASC:
        return sorted(rows, key=lambda r: r.points)
    if order is MasterySort.NAME_ASC:
        return sorted(rows, key=lambda r: r.name.casefold())
    return sorted(rows, key=lambda r: r.name.casefold(), reverse=True)


def merge_mastery(
    catalog: Mapping[int, str],
    owned: Iterable[MasteryEntry],
    order: MasterySort = MasterySort.POINTS_DESC,
) -> list[MasteryRow]:
    """Left-join the catalog against the player's sparse mastery list.

    Every catalog champion appears exactly once; champions the player has no
    entry for get level 0 and 0 points. Entries for ids missing from the
    catalog are dropped.
    """
    by_id = {entry.champion_id: entry for entry in owned}
    rows = []
    for champion_id, name in catalog.items():
        entry = by_id.get(champion_id)
        rows.append(
            MasteryRow(
                champion_id=champion_id,
                name=name,
                level=entry.champion_level if entry else 0,
                points=entry.champion_points if entry else 0,
            )
        )
    return sort_mastery(rows, order)
