"""Exporter process: wires the API client, sync engine and metrics server together."""

from __future__ import annotations

import asyncio
import signal

from loguru import logger

from ocean_exporter import settings
from ocean_exporter.api_client import DigitalOceanClient
from ocean_exporter.exposition_server import ExpositionServer
from ocean_exporter.scheduler import CancellationToken, IntervalTicker
from ocean_exporter.sync_engine import SyncEngine
from ocean_exporter.telemetry.metric_registry import ExporterMetrics


class ExporterService:
    def __init__(
        self,
        token: str,
        poll_interval_sec: float = settings.POLL_INTERVAL_SEC,
        host: str = settings.METRICS_HOST,
        port: int = settings.METRICS_PORT,
    ):
        self.token = token
        self.poll_interval_sec = poll_interval_sec
        self.host = host
        self.port = port
        self.metrics = ExporterMetrics()
        self.cancel_token = CancellationToken()

    def _setup_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.stop, sig)

    def stop(self, signum: int | None = None) -> None:
        if signum is not None:
            logger.info(f"Received signal {signum}, finishing current pass before shutdown")
        self.cancel_token.cancel()

    async def run(self) -> None:
        logger.info(f"Starting DigitalOcean exporter (poll interval {self.poll_interval_sec}s)")
        self._setup_signal_handlers()

        async with DigitalOceanClient(self.token) as client:
            engine = SyncEngine(client, self.metrics)
            server = ExpositionServer(self.metrics, engine, host=self.host, port=self.port)
            await server.start()
            try:
                await engine.run_forever(IntervalTicker(self.poll_interval_sec), self.cancel_token)
            finally:
                await server.stop()

        logger.info("DigitalOcean exporter stopped")
