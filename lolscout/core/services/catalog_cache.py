"""Process-wide read-through cache for the static champion catalog.

The catalog is fetched at most once per process. Concurrent first callers
share a single population under an asyncio lock; a failed or empty fetch is
not cached, so the next caller retries.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)

CatalogFetch = Callable[[], Awaitable[Mapping[int, str]]]


class ChampionCatalogCache:
    """Initialize-once champion catalog with an injected fetch function."""

    def __init__(self, fetch: CatalogFetch) -> None:
        self._fetch = fetch
        self._catalog: Mapping[int, str] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_populated(self) -> bool:
        return self._catalog is not None

    async def get(self) -> Mapping[int, str]:
        """Return the cached catalog, populating it on first use.

        Returns an empty mapping when the fetch fails; nothing is cached in
        that case.
        """
        if self._catalog is not None:
            return self._catalog

        async with self._lock:
            # Another caller may have populated it while we waited.
            if self._catalog is not None:
                return self._catalog
            try:
                fetched = await self._fetch()
            except Exception:
                logger.exception("Champion catalog fetch failed")
                return MappingProxyType({})
            if not fetched:
                logger.warning("Champion catalog fetch returned no champions")
                return MappingProxyType({})

            # Build fully before publishing so readers never see a partial catalog.
            self._catalog = MappingProxyType(dict(fetched))
            logger.info("Champion catalog cached (%d champions)", len(self._catalog))
            return self._catalog

    def invalidate(self) -> None:
        self._catalog = None
