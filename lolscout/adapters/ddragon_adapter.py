import logging
from typing import Any

import aiohttp

from lolscout.core.ports import ChampionCatalogPort

logger = logging.getLogger(__name__)


class DDragonAdapter(ChampionCatalogPort):
    def __init__(
        self,
        version: str | None = None,
        language: str = "en_US",
        timeout_seconds: float = 15.0,
    ) -> None:
        self.base_url = "https://ddragon.leagueoflegends.com"
        self.version = version
        self.language = language
        self.timeout_seconds = timeout_seconds
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "DDragonAdapter":
        self.session = self._new_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    def _new_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        return aiohttp.ClientSession(timeout=timeout)

    async def _get(self, url: str) -> Any | None:
        try:
            if not self.session:
                self.session = self._new_session()

            async with self.session.get(url) as response:
                if response.status == 200:
                    return await response.json()
                logger.warning(f"Failed to fetch {url}. Status: {response.status}")
                return None
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.warning(f"Network error while fetching {url}: {e}")
            return None

    async def get_latest_version(self) -> str | None:
        """Fetch the latest game version from versions.json"""
        versions = await self._get(f"{self.base_url}/api/versions.json")
        if isinstance(versions, list) and versions:
            return str(versions[0])
        return None

    async def _get_version(self) -> str | None:
        """Get pinned version or resolve and pin the latest one"""
        if not self.version:
            self.version = await self.get_latest_version()
        return self.version

    async def get_champion_catalog(self) -> dict[int, str]:
        """Get {champion numeric id: display name} for every champion"""
        version = await self._get_version()
        if not version:
            return {}
        data = await self._get(f"{self.base_url}/cdn/{version}/data/{self.language}/champion.json")
        if not isinstance(data, dict):
            return {}

        catalog: dict[int, str] = {}
        for champion in data.get("data", {}).values():
            try:
                catalog[int(champion["key"])] = champion.get("name") or champion["id"]
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed champion entry: {champion!r:.80}")
        return catalog

    def get_champion_image_url(self, champion_key: str) -> str | None:
        """Get champion image URL by champion key (None until a version is known)"""
        if not self.version:
            return None
        return f"{self.base_url}/cdn/{self.version}/img/champion/{champion_key}.png"

    def get_profile_icon_url(self, icon_id: int) -> str | None:
        """Get profile icon URL by icon ID (None until a version is known)"""
        if not self.version:
            return None
        return f"{self.base_url}/cdn/{self.version}/img/profileicon/{icon_id}.png"
