"""Duo partner tally over a player's valid games."""

from collections import Counter
from collections.abc import Iterable

from lolscout.contracts.report import DuoPartner
from lolscout.core.stats.aggregator import PlayerGame

DEFAULT_MIN_DUO_GAMES = 2


def count_teammates(games: Iterable[PlayerGame]) -> Counter[str]:
    """Count how often each teammate Riot ID shares the player's team.

    Teammates whose Riot ID is missing or carries the "undefined" sentinel in
    either half are never counted. Counter keeps first-seen insertion order.
    """
    counts: Counter[str] = Counter()
    for game in games:
        for teammate in game.match.info.teammates_of(game.player):
            riot_id = teammate.riot_id
            if riot_id is not None:
                counts[riot_id] += 1
    return counts


def tally_duo_partners(
    games: Iterable[PlayerGame], min_games: int = DEFAULT_MIN_DUO_GAMES
) -> list[DuoPartner]:
    """Teammates seen at least ``min_games`` times, most frequent first.

    The sort is stable, so ties stay in order of first appearance.
    """
    counts = count_teammates(games)
    frequent = [(riot_id, n) for riot_id, n in counts.items() if n >= min_games]
    frequent.sort(key=lambda item: item[1], reverse=True)
    return [DuoPartner(riot_id=riot_id, games=n) for riot_id, n in frequent]
