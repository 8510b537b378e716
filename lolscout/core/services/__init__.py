"""Service layer implementing business logic.

Services connect ports (interfaces) with adapters (implementations),
providing high-level operations to the HTTP server and CLI.
"""

from lolscout.core.services.catalog_cache import ChampionCatalogCache
from lolscout.core.services.player_analysis import (
    AnalysisError,
    ConfigurationMissingError,
    PlayerAnalysisService,
    UpstreamLookupError,
)

__all__ = [
    "AnalysisError",
    "ChampionCatalogCache",
    "ConfigurationMissingError",
    "PlayerAnalysisService",
    "UpstreamLookupError",
]
