"""Player analysis HTTP server (aiohttp).

Endpoints:
- GET /api/analyze      → Full analysis report for ?name=&tag=&region=
- OPTIONS /api/analyze  → CORS preflight
- GET /health           → Liveness probe

Every response carries the CORS allow-origin header so the report can be
fetched from a browser page on another origin.
"""

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from lolscout.config.settings import Settings, get_settings
from lolscout.core.observability import clear_correlation_id, debug_wrapper, set_correlation_id
from lolscout.core.services.player_analysis import AnalysisError, PlayerAnalysisService
from lolscout.core.stats import MasterySort

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class AnalyzeServer:
    """HTTP server wrapping PlayerAnalysisService."""

    def __init__(self, service: PlayerAnalysisService, settings: Settings | None = None) -> None:
        """Initialize analyze server.

        Args:
            service: Analysis orchestrator used by /api/analyze
            settings: Application settings (defaults to the cached settings)
        """
        self.service = service
        self.settings = settings or get_settings()
        self.app = web.Application(middlewares=[self._cors_middleware])
        self._runner: web.AppRunner | None = None
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Setup HTTP routes."""
        self.app.router.add_get("/api/analyze", self.handle_analyze)
        self.app.router.add_route("OPTIONS", "/api/analyze", self.handle_preflight)
        self.app.router.add_get("/health", self.health_check)

    def _cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.settings.cors_allow_origin,
            "Access-Control-Allow-Methods": "GET, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    @web.middleware
    async def _cors_middleware(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        try:
            response = await handler(request)
        except web.HTTPException as exc:
            exc.headers.update(self._cors_headers())
            raise
        response.headers.update(self._cors_headers())
        return response

    async def handle_preflight(self, request: web.Request) -> web.Response:
        return web.Response(status=204)

    @debug_wrapper(
        capture_result=False,
        capture_args=False,
        log_level="INFO",
        add_metadata={"endpoint": "/api/analyze"},
    )
    async def handle_analyze(self, request: web.Request) -> web.Response:
        """Run one analysis.

        Query parameters:
            name: Riot ID game name (required)
            tag: Riot ID tag line (required)
            region: Platform id such as ``na1`` (required)
            matches: Optional match window size override
            mastery_sort: Optional mastery ordering (``points_desc`` by default)
        """
        set_correlation_id(request.headers.get("X-Correlation-ID"))
        try:
            query = request.query
            region = query.get("region")

            try:
                mastery_sort = MasterySort(query.get("mastery_sort", MasterySort.POINTS_DESC.value))
            except ValueError:
                return web.json_response({"error": "Invalid mastery_sort value."}, status=400)

            match_count: int | None = None
            if query.get("matches"):
                try:
                    match_count = int(query["matches"])
                except ValueError:
                    return web.json_response({"error": "matches must be an integer."}, status=400)
                if not 1 <= match_count <= 100:
                    return web.json_response(
                        {"error": "matches must be between 1 and 100."}, status=400
                    )

            report = await self.service.analyze(
                query.get("name"),
                query.get("tag"),
                region,
                match_count=match_count,
                mastery_sort=mastery_sort,
            )
            return web.json_response(report.model_dump(mode="json"))
        except AnalysisError as e:
            logger.warning(f"Analysis rejected ({e.status_code}): {e}")
            return web.json_response({"error": str(e)}, status=e.status_code)
        except Exception:
            logger.exception("Unexpected error during analysis")
            return web.json_response({"error": "Internal server error."}, status=500)
        finally:
            clear_correlation_id()

    async def health_check(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response({"status": "ok"})

    async def start(self, host: str = "0.0.0.0", port: int = 3000) -> None:
        """Start the HTTP server.

        Args:
            host: Host to bind to
            port: Port to bind to
        """
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, host, port)
        await site.start()
        logger.info(f"Analyze server started on {host}:{port}")

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        logger.info("Analyze server stopped")
