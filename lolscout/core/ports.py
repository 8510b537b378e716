"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
All external dependencies must implement these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any

from lolscout.contracts.summoner import Account, LeagueEntry, MasteryEntry, SummonerProfile


class RiotAPIPort(ABC):
    """Port for Riot Games API operations."""

    @abstractmethod
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: str = "americas"
    ) -> Account | None:
        """Resolve a Riot ID to an account (None when not found)."""
        pass

    @abstractmethod
    async def get_summoner_by_puuid(self, puuid: str, platform: str) -> SummonerProfile | None:
        """Get summoner level and profile icon (None when not found)."""
        pass

    @abstractmethod
    async def get_league_entries(self, puuid: str, platform: str) -> list[LeagueEntry] | None:
        """Get ranked entries; [] for unranked players, None when the fetch failed."""
        pass

    @abstractmethod
    async def get_champion_masteries(
        self, puuid: str, platform: str
    ) -> list[MasteryEntry] | None:
        """Get the player's champion masteries; None when the fetch failed."""
        pass

    @abstractmethod
    async def get_match_history(
        self,
        puuid: str,
        platform: str,
        count: int = 20,
        queue_type: str | None = None,
    ) -> list[str]:
        """Get recent match IDs for a player, newest first."""
        pass

    @abstractmethod
    async def get_match_details(self, match_id: str, platform: str) -> dict[str, Any] | None:
        """Get raw Match-V5 detail payload."""
        pass


class ChampionCatalogPort(ABC):
    """Port for the static champion catalog (Data Dragon)."""

    @abstractmethod
    async def get_champion_catalog(self) -> dict[int, str]:
        """Return {champion_id: display name}; {} when unavailable."""
        pass

    @abstractmethod
    def get_champion_image_url(self, champion_key: str) -> str | None:
        pass

    @abstractmethod
    def get_profile_icon_url(self, icon_id: int) -> str | None:
        pass
