"""Synchronization engine: fetch, map and apply every resource kind on each tick.

Each resource kind is handled on its own. A failed fetch leaves that kind's
gauges exactly as the last successful poll left them and never touches any
other kind. A successful fetch replaces the kind's labeled families
wholesale, which is what retires droplets, IPs and endpoints that vanished
since the previous poll.
"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict
from typing import Any, Iterable

import tenacity
from loguru import logger

from ocean_exporter import settings
from ocean_exporter.api_client import ResourceFetcher
from ocean_exporter.models.sync_models import Observation, SyncResult
from ocean_exporter.resource_kinds import RESOURCE_KINDS, KindSpec, ResourceKind
from ocean_exporter.scheduler import CancellationToken, IntervalTicker, Ticker
from ocean_exporter.telemetry.metric_registry import ExporterMetrics
from ocean_exporter.utils.exceptions import FetchError, TransportError


def _log_retry_attempt(retry_state: tenacity.RetryCallState) -> None:
    """Log when a fetch is retried after a transport failure."""
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(f"🔄 Retry attempt {retry_state.attempt_number} after transport failure: {exc}")


class SyncEngine:
    def __init__(
        self,
        fetcher: ResourceFetcher,
        metrics: ExporterMetrics,
        kinds: Iterable[ResourceKind] | None = None,
        fetch_timeout_sec: float = settings.FETCH_TIMEOUT_SEC,
        fetch_attempts: int = settings.FETCH_ATTEMPTS,
        retry_backoff_sec: float = settings.FETCH_RETRY_BACKOFF_SEC,
        max_concurrency: int = settings.MAX_CONCURRENT_FETCHES,
    ):
        self.fetcher = fetcher
        self.metrics = metrics
        self.kinds: list[KindSpec] = [RESOURCE_KINDS[k] for k in (kinds or RESOURCE_KINDS)]
        self.fetch_timeout_sec = fetch_timeout_sec
        self.fetch_attempts = max(1, fetch_attempts)
        self.retry_backoff_sec = retry_backoff_sec
        self.max_concurrency = max_concurrency
        self.last_results: dict[ResourceKind, SyncResult] = {}
        self.passes_completed = 0
        self._pass_lock = asyncio.Lock()

    async def _fetch(self, spec: KindSpec) -> Any:
        """Fetch one kind, retrying transport failures only."""
        retrying = tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.fetch_attempts),
            wait=tenacity.wait_exponential(multiplier=self.retry_backoff_sec, max=self.retry_backoff_sec * 8),
            retry=tenacity.retry_if_exception_type(TransportError),
            before_sleep=_log_retry_attempt,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await asyncio.wait_for(spec.fetch(self.fetcher), timeout=self.fetch_timeout_sec)
                except asyncio.TimeoutError as e:
                    raise TransportError(spec.kind.value, f"no result within {self.fetch_timeout_sec}s") from e

    def apply(self, spec: KindSpec, observations: list[Observation]) -> None:
        """Write observations into the kind's gauge families.

        Labeled kinds are reset and replaced: each family gets exactly the
        series in ``observations`` (none at all for an empty fetch). Singleton
        kinds only overwrite the gauges they have an observation for.
        """
        families = self.metrics.families(spec.kind)

        if spec.singleton:
            for observation in observations:
                families[observation.gauge].set(observation.value)
            return

        staged: dict[str, dict[tuple[str, ...], float]] = defaultdict(dict)
        for observation in observations:
            staged[observation.gauge][observation.labelvalues] = observation.value
        for gauge, family in families.items():
            family.replace(staged.get(gauge, {}))

    async def sync_kind(self, kind: ResourceKind) -> SyncResult:
        """Run fetch -> map -> apply for one resource kind. Never raises."""
        spec = RESOURCE_KINDS[kind]
        started = time.perf_counter()

        with logger.contextualize(kind=kind.value):
            try:
                collection = await self._fetch(spec)
            except FetchError as e:
                logger.error(f"Loading {kind.value} failed, keeping previous values: {e}")
                result = SyncResult.failed(kind, f"{type(e).__name__}: {e}")
            except Exception as e:
                logger.exception(f"Unexpected error loading {kind.value}: {e}")
                result = SyncResult.failed(kind, f"{type(e).__name__}: {e}")
            else:
                try:
                    observations = spec.mapper(collection)
                    self.apply(spec, observations)
                except Exception as e:
                    logger.exception(f"Unexpected error applying {kind.value}: {e}")
                    result = SyncResult.failed(kind, f"{type(e).__name__}: {e}")
                else:
                    result = SyncResult.applied(kind, spec.record_count(collection))
                    logger.debug(f"Applied {result.count} {kind.value} ({len(observations)} observations)")

        self._record(result, time.perf_counter() - started)
        return result

    def _record(self, result: SyncResult, duration: float) -> None:
        kind = result.kind.value
        self.last_results[result.kind] = result
        self.metrics.sync_total.labels(kind=kind, status=result.status.value).inc()
        self.metrics.sync_duration_seconds.labels(kind=kind).observe(duration)
        if result.ok:
            self.metrics.last_success_timestamp_seconds.labels(kind=kind).set(time.time())
            self.metrics.synced_resources.labels(kind=kind).set(result.count)

    async def run_pass(self) -> dict[ResourceKind, SyncResult] | None:
        """Synchronize every kind once, concurrently.

        Returns None without doing anything if another pass is still running.
        """
        if self._pass_lock.locked():
            logger.warning("Previous sync pass still running, skipping this one")
            return None

        async with self._pass_lock:
            slots = asyncio.Semaphore(max(1, self.max_concurrency))

            async def bounded(kind: ResourceKind) -> SyncResult:
                async with slots:
                    return await self.sync_kind(kind)

            results = await asyncio.gather(*(bounded(spec.kind) for spec in self.kinds))
            self.passes_completed += 1

        by_kind = {result.kind: result for result in results}
        failed = [r.kind.value for r in results if not r.ok]
        if failed:
            logger.info(f"Sync pass {self.passes_completed} finished, failed kinds: {', '.join(failed)}")
        else:
            logger.debug(f"Sync pass {self.passes_completed} finished, all {len(results)} kinds applied")
        return by_kind

    async def run_forever(self, ticker: Ticker, token: CancellationToken | None = None) -> None:
        """Run one pass per tick until the ticker stops or ``token`` is cancelled."""
        token = token or CancellationToken()
        logger.info(f"Starting sync loop for {len(self.kinds)} resource kinds")
        async for _ in ticker.ticks(token):
            await self.run_pass()
            if token.cancelled:
                break
        logger.info("Sync loop stopped")


async def run_forever(
    fetcher: ResourceFetcher,
    poll_interval: float,
    metrics: ExporterMetrics,
    token: CancellationToken | None = None,
) -> None:
    """Poll every resource kind each ``poll_interval`` seconds.

    Only returns once ``token`` is cancelled.
    """
    engine = SyncEngine(fetcher, metrics)
    await engine.run_forever(IntervalTicker(poll_interval), token)
