"""Match window aggregation - pure domain functions with zero I/O.

Folds a player's match detail records into cumulative sums for two
overlapping windows: every valid game, and the ranked-queue subset.

A match is valid when the player is among its participants and it lasted at
least ``min_duration_seconds``. Invalid matches contribute to nothing.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from lolscout.contracts.match import MatchDTO, Participant
from lolscout.contracts.report import FlashLabel, WindowStats

logger = logging.getLogger(__name__)

DEFAULT_MIN_DURATION_SECONDS = 300
DEFAULT_RANKED_QUEUE_IDS = frozenset({420, 440})
FLASH_SPELL_ID = 4


@dataclass(frozen=True, slots=True)
class PlayerGame:
    """A valid match paired with the target player's own record."""

    match: MatchDTO
    player: Participant
    kill_participation: float

    @property
    def queue_id(self) -> int:
        return self.match.info.queue_id


@dataclass(frozen=True, slots=True)
class WindowAggregation:
    all_games: WindowStats
    ranked_games: WindowStats
    games: list[PlayerGame]
    ranked: list[PlayerGame]


def kill_participation(takedowns: int, team_kills: int) -> float:
    """Percentage of team kills the player took part in, capped at 100.

    A team-kill count of 0 with player takedowns > 0 happens when upstream
    undercounts team kills; that case is treated as full participation.
    """
    if team_kills <= 0:
        return 100.0 if takedowns > 0 else 0.0
    return min(100.0, takedowns / team_kills * 100)


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    return (kills + assists) / max(1, deaths)


def flash_label(slot1_uses: int, slot2_uses: int) -> FlashLabel:
    if slot1_uses > 0 and slot2_uses > 0:
        return "D & F"
    if slot1_uses > 0:
        return "D"
    if slot2_uses > 0:
        return "F"
    return "None"


def _safe_div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


@dataclass(slots=True)
class _WindowAccumulator:
    tracked_spell_id: int = FLASH_SPELL_ID
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    dpm: float = 0.0
    cspm: float = 0.0
    kp: float = 0.0
    vision: float = 0.0
    multi_kills: int = 0
    slot1: int = 0
    slot2: int = 0
    champions: set[str] = field(default_factory=set)

    def add(self, game: PlayerGame) -> None:
        player = game.player
        minutes = game.match.info.duration_minutes

        self.games += 1
        self.wins += int(player.win)
        self.kills += player.kills
        self.deaths += player.deaths
        self.assists += player.assists
        self.dpm += _safe_div(player.total_damage_dealt_to_champions, minutes)
        self.cspm += _safe_div(player.total_minions_killed, minutes)
        self.kp += game.kill_participation
        self.vision += player.vision_score
        self.multi_kills += player.penta_kills + player.quadra_kills
        if player.summoner1_id == self.tracked_spell_id:
            self.slot1 += 1
        if player.summoner2_id == self.tracked_spell_id:
            self.slot2 += 1
        self.champions.add(player.champion_name or str(player.champion_id))

    def finalize(self) -> WindowStats:
        games = self.games
        return WindowStats(
            games=games,
            wins=self.wins,
            losses=games - self.wins,
            win_rate=_safe_div(self.wins, games) * 100,
            avg_kills=_safe_div(self.kills, games),
            avg_deaths=_safe_div(self.deaths, games),
            avg_assists=_safe_div(self.assists, games),
            kda=kda_ratio(self.kills, self.deaths, self.assists),
            avg_dpm=_safe_div(self.dpm, games),
            avg_cspm=_safe_div(self.cspm, games),
            avg_kp=min(100.0, _safe_div(self.kp, games)),
            avg_vision=_safe_div(self.vision, games),
            multi_kills=self.multi_kills,
            unique_champions=sorted(self.champions),
            flash_slot1=self.slot1,
            flash_slot2=self.slot2,
            flash_label=flash_label(self.slot1, self.slot2),
        )


def valid_games(
    matches: Iterable[MatchDTO | None],
    puuid: str,
    min_duration_seconds: int = DEFAULT_MIN_DURATION_SECONDS,
) -> list[PlayerGame]:
    """Filter matches down to valid games for ``puuid``, preserving order.

    ``None`` entries stand for failed detail fetches and are skipped.
    """
    games: list[PlayerGame] = []
    for match in matches:
        if match is None:
            continue
        info = match.info
        if info.game_duration < min_duration_seconds:
            logger.debug(
                "Skipping short match %s (%ss)", match.match_id, info.game_duration
            )
            continue
        player = info.find_participant(puuid)
        if player is None:
            logger.debug("Player not found in match %s", match.match_id)
            continue
        team_kills = info.team_kills(player.team_id)
        games.append(
            PlayerGame(
                match=match,
                player=player,
                kill_participation=kill_participation(player.kills + player.assists, team_kills),
            )
        )
    return games


def aggregate_windows(
    matches: Iterable[MatchDTO | None],
    puuid: str,
    *,
    ranked_queue_ids: Iterable[int] = DEFAULT_RANKED_QUEUE_IDS,
    min_duration_seconds: int = DEFAULT_MIN_DURATION_SECONDS,
    tracked_spell_id: int = FLASH_SPELL_ID,
) -> WindowAggregation:
    """Aggregate all valid games and the ranked-only subset in a single pass.

    Returns:
        WindowAggregation with both windows' stats and the valid games behind them
    """
    queues = frozenset(ranked_queue_ids)
    all_acc = _WindowAccumulator(tracked_spell_id=tracked_spell_id)
    ranked_acc = _WindowAccumulator(tracked_spell_id=tracked_spell_id)
    ranked: list[PlayerGame] = []

    games = valid_games(matches, puuid, min_duration_seconds)
    for game in games:
        all_acc.add(game)
        if game.queue_id in queues:
            ranked_acc.add(game)
            ranked.append(game)

    logger.info(
        "Aggregated %d valid games (%d ranked) for %s", len(games), len(ranked), puuid[:8]
    )
    return WindowAggregation(
        all_games=all_acc.finalize(),
        ranked_games=ranked_acc.finalize(),
        games=games,
        ranked=ranked,
    )
