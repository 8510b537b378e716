"""Player analysis service - orchestrates upstream fetches and the stats core.

Flow for one Riot ID:
1. Account and summoner lookups (required; failures abort the request)
2. League entries, masteries, match ids and champion catalog, concurrently
3. Match details, concurrently under a semaphore and an overall deadline
4. Aggregation, duo tally, mastery merge and highlight classification

Only missing input and failed required lookups raise. Every other upstream
failure degrades into the report (fetch-failed rank, empty mastery list,
skipped matches).
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from lolscout.adapters.riot_api import RiotAPIError
from lolscout.config.settings import Settings, get_settings
from lolscout.contracts.common import Platform, account_route, queue_label
from lolscout.contracts.match import MatchDTO
from lolscout.contracts.report import AnalysisReport, MatchHistoryEntry
from lolscout.contracts.summoner import LeagueEntry, MasteryEntry
from lolscout.core.observability import trace_performance
from lolscout.core.ports import ChampionCatalogPort, RiotAPIPort
from lolscout.core.services.catalog_cache import ChampionCatalogCache
from lolscout.core.stats import (
    MasterySort,
    PlayerGame,
    aggregate_windows,
    build_highlight_input,
    classify_highlights,
    kda_ratio,
    merge_mastery,
    season_totals,
    select_rank,
    tally_duo_partners,
)
from lolscout.core.stats.highlights import DEFAULT_ICON_MAX_ID

logger = logging.getLogger(__name__)


# ========================================================================
# Exceptions
# ========================================================================


class AnalysisError(Exception):
    """Base exception for request-level analysis failures."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ConfigurationMissingError(AnalysisError):
    """Required identity parameters (or the API key) are missing."""

    status_code = 400


class UpstreamLookupError(AnalysisError):
    """Account or summoner lookup failed; nothing downstream can proceed."""

    status_code = 500


# ========================================================================
# Service Implementation
# ========================================================================


class PlayerAnalysisService:
    """Builds an AnalysisReport for a Riot ID."""

    def __init__(
        self,
        riot_api: RiotAPIPort,
        ddragon: ChampionCatalogPort,
        catalog_cache: ChampionCatalogCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.riot_api = riot_api
        self.ddragon = ddragon
        self.catalog_cache = catalog_cache or ChampionCatalogCache(ddragon.get_champion_catalog)
        self.settings = settings or get_settings()

    @staticmethod
    def _validate_input(
        game_name: str | None, tag_line: str | None, platform: str | None
    ) -> tuple[str, str, str]:
        name = (game_name or "").strip()
        tag = (tag_line or "").strip().lstrip("#")
        plat = (platform or "").strip().lower()
        if not name or not tag:
            raise ConfigurationMissingError("Game Name and Tag are required.")
        if not plat:
            raise ConfigurationMissingError("Region is required.")
        try:
            Platform(plat)
        except ValueError:
            raise ConfigurationMissingError(f"Unknown region '{plat}'.") from None
        return name, tag, plat

    @trace_performance
    async def analyze(
        self,
        game_name: str | None,
        tag_line: str | None,
        platform: str | None,
        *,
        match_count: int | None = None,
        mastery_sort: MasterySort = MasterySort.POINTS_DESC,
    ) -> AnalysisReport:
        """Run the full analysis for ``game_name#tag_line`` on ``platform``.

        Raises:
            ConfigurationMissingError: Missing name/tag/region or API key
            UpstreamLookupError: Account or summoner lookup failed
        """
        name, tag, plat = self._validate_input(game_name, tag_line, platform)
        if not self.settings.riot_api_key:
            raise ConfigurationMissingError("API key is not configured.", status_code=500)

        region = account_route(plat).value
        try:
            account = await self.riot_api.get_account_by_riot_id(name, tag, region)
        except RiotAPIError as e:
            raise UpstreamLookupError(f"Riot ID lookup failed: {e}") from e
        if account is None:
            raise UpstreamLookupError("Riot ID not found. Check Game Name, Tag Line, and Region.")

        try:
            summoner = await self.riot_api.get_summoner_by_puuid(account.puuid, plat)
        except RiotAPIError as e:
            raise UpstreamLookupError(f"Summoner lookup failed: {e}") from e
        if summoner is None:
            raise UpstreamLookupError("Summoner data not found.")

        count = match_count or self.settings.match_window_size
        league_entries, masteries, match_ids, catalog = await asyncio.gather(
            self._fetch_league_entries(account.puuid, plat),
            self._fetch_masteries(account.puuid, plat),
            self.riot_api.get_match_history(
                account.puuid, plat, count=count, queue_type=self.settings.match_id_queue_type
            ),
            self.catalog_cache.get(),
        )

        matches = await self._fetch_matches(match_ids, plat)

        rank = select_rank(*league_entries)
        season = season_totals(rank)
        windows = aggregate_windows(
            matches,
            account.puuid,
            ranked_queue_ids=self.settings.ranked_queue_ids,
            min_duration_seconds=self.settings.min_game_duration_seconds,
            tracked_spell_id=self.settings.tracked_summoner_spell_id,
        )
        duo_source = windows.ranked if self.settings.duo_ranked_only else windows.games
        highlights = classify_highlights(
            build_highlight_input(
                rank=rank,
                season=season,
                all_games=windows.all_games,
                ranked_games=windows.ranked_games,
                profile_icon_id=summoner.profile_icon_id,
            )
        )

        return AnalysisReport(
            riot_id=account.riot_id,
            puuid=account.puuid,
            platform=plat,
            account_level=summoner.summoner_level,
            profile_icon_id=summoner.profile_icon_id,
            profile_icon_url=self.ddragon.get_profile_icon_url(summoner.profile_icon_id),
            icon_is_default=summoner.profile_icon_id <= DEFAULT_ICON_MAX_ID,
            rank=rank,
            rank_display=rank.display,
            season=season,
            all_games=windows.all_games,
            ranked_games=windows.ranked_games,
            duo_partners=tally_duo_partners(duo_source, self.settings.duo_min_games),
            mastery=merge_mastery(catalog, masteries, mastery_sort),
            highlights=highlights,
            match_history=[self._history_entry(game) for game in windows.games],
        )

    async def _fetch_league_entries(
        self, puuid: str, platform: str
    ) -> tuple[list[LeagueEntry] | None, str | None]:
        try:
            entries = await self.riot_api.get_league_entries(puuid, platform)
        except Exception as e:
            logger.warning(f"Rank fetch failed for {puuid}: {e}")
            return None, str(e)
        if entries is None:
            return None, "rank lookup failed"
        return entries, None

    async def _fetch_masteries(self, puuid: str, platform: str) -> list[MasteryEntry]:
        try:
            masteries = await self.riot_api.get_champion_masteries(puuid, platform)
        except Exception as e:
            logger.warning(f"Mastery fetch failed for {puuid}: {e}")
            return []
        return masteries or []

    async def _fetch_match(
        self, match_id: str, platform: str, semaphore: asyncio.Semaphore
    ) -> MatchDTO | None:
        async with semaphore:
            try:
                raw = await self.riot_api.get_match_details(match_id, platform)
            except Exception as e:
                logger.warning(f"Skipping match {match_id}: {e}")
                return None
        if raw is None:
            logger.warning(f"Skipping match {match_id}: no detail payload")
            return None
        return self._parse_match(match_id, raw)

    @staticmethod
    def _parse_match(match_id: str, raw: dict[str, Any]) -> MatchDTO | None:
        try:
            return MatchDTO.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping match {match_id}: malformed payload ({e.error_count()} errors)")
            return None

    async def _fetch_matches(
        self, match_ids: Sequence[str], platform: str
    ) -> list[MatchDTO | None]:
        """Fetch match details concurrently, returned in match-id order.

        Fetches still running at the deadline are cancelled and count as
        skipped matches.
        """
        if not match_ids:
            return []

        semaphore = asyncio.Semaphore(self.settings.match_fetch_concurrency)
        tasks = [
            asyncio.create_task(self._fetch_match(match_id, platform, semaphore))
            for match_id in match_ids
        ]
        done, pending = await asyncio.wait(
            tasks, timeout=self.settings.analysis_deadline_seconds
        )
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(
                f"Match fetch deadline reached; skipping {len(pending)} of {len(tasks)} matches"
            )
            await asyncio.gather(*pending, return_exceptions=True)

        return [task.result() if task in done else None for task in tasks]

    def _history_entry(self, game: PlayerGame) -> MatchHistoryEntry:
        player = game.player
        info = game.match.info
        return MatchHistoryEntry(
            match_id=game.match.match_id,
            champion_name=player.champion_name,
            win=player.win,
            kills=player.kills,
            deaths=player.deaths,
            assists=player.assists,
            kda=kda_ratio(player.kills, player.deaths, player.assists),
            queue_id=info.queue_id,
            queue_label=queue_label(info.queue_id),
            duration_minutes=round(info.duration_minutes),
            champion_icon_url=(
                self.ddragon.get_champion_image_url(player.champion_name)
                if player.champion_name
                else None
            ),
        )
