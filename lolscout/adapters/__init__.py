"""Adapters for external services (Riot API, Data Dragon)."""

from .ddragon_adapter import DDragonAdapter
from .riot_api import RateLimitError, RiotAPIAdapter, RiotAPIError

__all__ = ["DDragonAdapter", "RateLimitError", "RiotAPIAdapter", "RiotAPIError"]
