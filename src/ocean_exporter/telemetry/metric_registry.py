"""Exporter-wide Prometheus metrics.

Everything lives on one dedicated CollectorRegistry owned by an
``ExporterMetrics`` instance, built once at startup and handed to the sync
engine and the exposition server. Nothing here is module-level state, so
tests can build as many independent instances as they like.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from ocean_exporter import settings
from ocean_exporter.resource_kinds import RESOURCE_KINDS, KindSpec, ResourceKind
from ocean_exporter.telemetry.gauge_family import GaugeFamily


class ExporterMetrics:
    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        prefix: str = settings.METRICS_PREFIX,
        kinds: dict[ResourceKind, KindSpec] | None = None,
    ):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.prefix = prefix
        self._families: dict[ResourceKind, dict[str, GaugeFamily]] = {}

        # --- Resource gauges (static schema, one family per gauge) ---
        for kind, spec in (kinds or RESOURCE_KINDS).items():
            families: dict[str, GaugeFamily] = {}
            for gauge in spec.gauges:
                family = GaugeFamily(f"{prefix}{gauge.name}", gauge.documentation, gauge.labelnames)
                self.registry.register(family)
                families[gauge.name] = family
            self._families[kind] = families

        # --- Sync health ---
        self.sync_total = Counter(
            f"{prefix}exporter_sync_total",
            "Synchronization attempts per resource kind",
            labelnames=["kind", "status"],
            registry=self.registry,
        )
        self.sync_duration_seconds = Histogram(
            f"{prefix}exporter_sync_duration_seconds",
            "Fetch, map and apply latency per resource kind in seconds",
            labelnames=["kind"],
            buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
            registry=self.registry,
        )
        self.last_success_timestamp_seconds = Gauge(
            f"{prefix}exporter_last_success_timestamp_seconds",
            "Unix time of the last successful synchronization per resource kind",
            labelnames=["kind"],
            registry=self.registry,
        )
        self.synced_resources = Gauge(
            f"{prefix}exporter_synced_resources",
            "Number of resources applied by the last successful synchronization",
            labelnames=["kind"],
            registry=self.registry,
        )

    def families(self, kind: ResourceKind) -> dict[str, GaugeFamily]:
        """Gauge families of ``kind`` keyed by their unprefixed gauge name."""
        return self._families[kind]

    def family(self, kind: ResourceKind, gauge: str) -> GaugeFamily:
        return self._families[kind][gauge]
