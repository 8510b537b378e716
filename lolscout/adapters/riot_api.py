"""Riot API adapter using Cassiopeia + direct REST.

Provides:
- Account-V1 (REST)
- Summoner by PUUID (Cassiopeia)
- League-V4 entries and Champion-Mastery-V4 by PUUID (REST)
- Match-V5 IDs/Match (REST)

Implements RiotAPIPort with consistent async semantics and session reuse.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp
import cassiopeia as cass
from cassiopeia import Summoner

from lolscout.config.settings import Settings, get_settings
from lolscout.contracts.common import regional_route
from lolscout.contracts.summoner import Account, LeagueEntry, MasteryEntry, SummonerProfile
from lolscout.core.observability import trace_adapter
from lolscout.core.ports import RiotAPIPort


class RiotAPIError(Exception):
    def __init__(
        self, message: str, status_code: int | None = None, retry_after: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after


class RateLimitError(RiotAPIError):
    def __init__(self, retry_after: int) -> None:
        super().__init__("Rate limit exceeded", status_code=429, retry_after=retry_after)


logger = logging.getLogger(__name__)

_CASS_REGIONS = {
    "na1": "NA",
    "euw1": "EUW",
    "eun1": "EUNE",
    "kr": "KR",
    "br1": "BR",
    "la1": "LAN",
    "la2": "LAS",
    "oc1": "OCE",
    "ru": "RU",
    "tr1": "TR",
    "jp1": "JP",
    "ph2": "PH",
    "sg2": "SG",
    "th2": "TH",
    "tw2": "TW",
    "vn2": "VN",
}


class RiotAPIAdapter(RiotAPIPort):
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        cass.apply_settings(
            {
                "api_key": self.settings.riot_api_key or "",
                "default_region": "NA",
                "rate_limiter": {
                    "type": "application",
                    "limiting_share": 1.0,
                    "include_429s": False,
                },
                "cache": {
                    "type": "lru",
                    "expiration_time": {"summoner": 3600},
                },
            }
        )
        logging.getLogger("datapipelines.pipelines").setLevel(logging.WARNING)
        logging.getLogger("cassiopeia").setLevel(logging.WARNING)
        self._session: aiohttp.ClientSession | None = None
        self._session_loop: asyncio.AbstractEventLoop | None = None
        logger.info("Riot API adapter initialized")

    async def _ensure_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        needs_new_session = (
            self._session is None
            or getattr(self._session, "closed", True)
            or self._session_loop is None
            or self._session_loop is not loop
        )
        if needs_new_session:
            if self._session and not getattr(self._session, "closed", True):
                try:
                    await self._session.close()
                except Exception:
                    logger.warning("Failed to close stale Riot API session", exc_info=True)
            timeout = aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._session_loop = loop
        return self._session

    async def close(self) -> None:
        try:
            if self._session and not self._session.closed:
                await self._session.close()
        finally:
            self._session = None
            self._session_loop = None

    async def _get_json(self, url: str, what: str) -> Any | None:
        """GET a Riot endpoint.

        Returns the decoded body on 200 and None on 404, other error statuses
        and transport failures. Raises RateLimitError on 429 and RiotAPIError
        on 401/403 so key problems are never mistaken for missing data.
        """
        headers = {"X-Riot-Token": self.settings.riot_api_key or ""}
        try:
            session = await self._ensure_session()
            async with session.get(url, headers=headers) as resp:
                if resp.status == 200:
                    return await resp.json()
                if resp.status == 404:
                    return None
                if resp.status == 429:
                    raise RateLimitError(int(resp.headers.get("Retry-After", "60")))
                if resp.status in (401, 403):
                    raise RiotAPIError(
                        "Forbidden: Check API key permissions", status_code=resp.status
                    )
                logger.error(f"{what} API error {resp.status}: {await resp.text()}")
                return None
        except RiotAPIError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"{what} request failed: {e}")
            return None

    @trace_adapter
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: str = "americas"
    ) -> Account | None:
        url = (
            f"https://{region}.api.riotgames.com/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name)}/{quote(tag_line)}"
        )
        data = await self._get_json(url, "Account")
        if not isinstance(data, dict) or not data.get("puuid"):
            return None
        return Account(
            puuid=data["puuid"],
            game_name=data.get("gameName") or game_name,
            tag_line=data.get("tagLine") or tag_line,
        )

    @trace_adapter
    async def get_summoner_by_puuid(self, puuid: str, platform: str) -> SummonerProfile | None:
        try:
            summoner = await asyncio.to_thread(
                Summoner, puuid=puuid, region=self._convert_region(platform)
            )
            await asyncio.to_thread(summoner.load)
            return SummonerProfile(
                puuid=summoner.puuid,
                profile_icon_id=summoner.profile_icon.id,
                summoner_level=summoner.level,
            )
        except Exception as e:
            # Cassiopeia surfaces HTTP failures as its own error hierarchy.
            logger.error(f"Summoner fetch error for puuid {puuid}: {e}")
            return None

    @trace_adapter
    async def get_league_entries(self, puuid: str, platform: str) -> list[LeagueEntry] | None:
        url = f"https://{platform}.api.riotgames.com/lol/league/v4/entries/by-puuid/{puuid}"
        try:
            data = await self._get_json(url, "League")
        except RiotAPIError as e:
            logger.warning(f"League entries unavailable for {puuid}: {e}")
            return None
        if not isinstance(data, list):
            return None
        return [LeagueEntry.model_validate(entry) for entry in data]

    @trace_adapter
    async def get_champion_masteries(
        self, puuid: str, platform: str
    ) -> list[MasteryEntry] | None:
        url = (
            f"https://{platform}.api.riotgames.com/lol/champion-mastery/v4/"
            f"champion-masteries/by-puuid/{puuid}"
        )
        try:
            data = await self._get_json(url, "Mastery")
        except RiotAPIError as e:
            logger.warning(f"Champion masteries unavailable for {puuid}: {e}")
            return None
        if not isinstance(data, list):
            return None
        return [MasteryEntry.model_validate(entry) for entry in data]

    @trace_adapter
    async def get_match_history(
        self,
        puuid: str,
        platform: str,
        count: int = 20,
        queue_type: str | None = None,
    ) -> list[str]:
        route = regional_route(platform).value
        url = (
            f"https://{route}.api.riotgames.com/lol/match/v5/matches/by-puuid/{puuid}/ids"
            f"?start=0&count={max(1, min(count, 100))}"
        )
        if queue_type:
            url += f"&type={quote(queue_type)}"
        try:
            data = await self._get_json(url, "Match IDs")
        except RiotAPIError as e:
            logger.warning(f"Match history unavailable for {puuid}: {e}")
            return []
        return [str(m) for m in data] if isinstance(data, list) else []

    async def get_match_details(self, match_id: str, platform: str) -> dict[str, Any] | None:
        route = regional_route(platform).value
        url = f"https://{route}.api.riotgames.com/lol/match/v5/matches/{match_id}"
        data = await self._get_json(url, "Match details")
        return data if isinstance(data, dict) else None

    def _convert_region(self, platform: str) -> str:
        return _CASS_REGIONS.get(platform.lower(), "NA")
