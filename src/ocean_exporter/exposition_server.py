"""HTTP server exposing the registry for Prometheus scrapes, plus a health probe."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from aiohttp import web
from loguru import logger
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ocean_exporter import settings
from ocean_exporter.sync_engine import SyncEngine
from ocean_exporter.telemetry.metric_registry import ExporterMetrics
from ocean_exporter.telemetry.snapshot import resource_series


class ExpositionHandler:
    def __init__(self, metrics: ExporterMetrics, engine: SyncEngine | None = None):
        self.metrics = metrics
        self.engine = engine

    async def metrics_endpoint(self, request: web.Request) -> web.Response:
        # CONTENT_TYPE_LATEST carries a charset, which aiohttp refuses in content_type=
        return web.Response(body=generate_latest(self.metrics.registry), headers={"Content-Type": CONTENT_TYPE_LATEST})

    async def health(self, request: web.Request) -> web.Response:
        results = dict(self.engine.last_results) if self.engine else {}
        if not results:
            status = "starting"
        elif all(r.ok for r in results.values()):
            status = "healthy"
        else:
            status = "degraded"

        return web.json_response(
            {
                "status": status,
                "passes_completed": self.engine.passes_completed if self.engine else 0,
                "series": len(resource_series(self.metrics)),
                "kinds": {
                    kind.value: {"status": r.status.value, "count": r.count, "reason": r.reason}
                    for kind, r in results.items()
                },
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            status=200,
        )


def create_app(metrics: ExporterMetrics, engine: SyncEngine | None = None) -> web.Application:
    handler = ExpositionHandler(metrics, engine)
    app = web.Application()
    app.router.add_get("/metrics", handler.metrics_endpoint)
    app.router.add_get("/health", handler.health)
    return app


class ExpositionServer:
    """aiohttp server for ``/metrics`` and ``/health``."""

    def __init__(
        self,
        metrics: ExporterMetrics,
        engine: SyncEngine | None = None,
        host: str = settings.METRICS_HOST,
        port: int = settings.METRICS_PORT,
    ):
        self.metrics = metrics
        self.engine = engine
        self.host = host
        self.port = port
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None

    async def start(self) -> None:
        logger.info(f"Starting metrics server on {self.host}:{self.port}")
        self.runner = web.AppRunner(create_app(self.metrics, self.engine))
        await self.runner.setup()
        self.site = web.TCPSite(self.runner, self.host, self.port)
        await self.site.start()
        logger.info(f"Metrics server listening on http://{self.host}:{self.port}/metrics")

    async def stop(self) -> None:
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            self.site = None
        logger.info("Metrics server stopped")
