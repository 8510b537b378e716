"""
Main entry point for the lolscout analysis server.
"""

import asyncio
import logging
import sys

from lolscout.adapters.ddragon_adapter import DDragonAdapter
from lolscout.adapters.riot_api import RiotAPIAdapter
from lolscout.api.analyze_server import AnalyzeServer
from lolscout.config.settings import get_settings
from lolscout.core.observability import configure_logging
from lolscout.core.services import ChampionCatalogCache, PlayerAnalysisService


def setup_logging() -> None:
    """Route all logging through structlog."""
    settings = get_settings()
    configure_logging(level=settings.app_log_level)

    # Third-party HTTP noise stays at WARNING unless debugging
    if not settings.app_debug:
        logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def health_check() -> None:
    """Perform basic configuration checks before serving."""
    logger = logging.getLogger(__name__)
    settings = get_settings()

    logger.info("Performing health checks...")
    if not settings.riot_api_key or not settings.riot_api_key.strip():
        # Requests will fail with 500 until a key is configured
        if settings.is_production:
            logger.error("RIOT_API_KEY not found in environment variables!")
            sys.exit(1)
        logger.warning("RIOT_API_KEY is not set; /api/analyze will return 500")
    logger.info("Health checks passed")


async def main() -> None:
    """Main async entry point."""
    logger = logging.getLogger(__name__)

    try:
        setup_logging()
        settings = get_settings()
        logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.app_env})")

        health_check()

        logger.info("Initializing adapters...")
        riot_api = RiotAPIAdapter(settings)
        ddragon = DDragonAdapter(
            version=settings.ddragon_version,
            language=settings.ddragon_language,
            timeout_seconds=settings.http_timeout_seconds,
        )
        service = PlayerAnalysisService(
            riot_api=riot_api,
            ddragon=ddragon,
            catalog_cache=ChampionCatalogCache(ddragon.get_champion_catalog),
            settings=settings,
        )

        server = AnalyzeServer(service, settings)
        await server.start(host=settings.server_host, port=settings.server_port)
        logger.info("All services initialized successfully")

        # Serve until cancelled
        await asyncio.Event().wait()

    except asyncio.CancelledError:
        logger.info("Shutdown requested")
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)
    finally:
        logger.info("Shutting down services...")
        if "server" in locals():
            await server.stop()
        if "riot_api" in locals():
            await riot_api.close()
        if "ddragon" in locals():
            await ddragon.close()
        logger.info("All services stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user.")
