"""Read back the series currently exposed by a prometheus CollectorRegistry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

from loguru import logger
from prometheus_client import CollectorRegistry

from ocean_exporter.models.sync_models import MetricSample

if TYPE_CHECKING:
    from ocean_exporter.telemetry.metric_registry import ExporterMetrics


def _selected(name: str, prefix: str | None, exclude_prefixes: tuple[str, ...]) -> bool:
    if prefix is not None and not name.startswith(prefix):
        return False
    return not name.startswith(exclude_prefixes)


def snapshot_registry(
    registry: CollectorRegistry,
    prefix: str | None = None,
    exclude_prefixes: Iterable[str] = (),
) -> list[MetricSample]:
    """One MetricSample per exposed series.

    Families are kept when their name starts with ``prefix`` (if given) and
    with none of ``exclude_prefixes``. A family that fails to collect is
    skipped with a warning.
    """
    exclude = tuple(exclude_prefixes)
    now = datetime.now(timezone.utc)

    try:
        families = [f for f in registry.collect() if _selected(f.name, prefix, exclude)]
    except Exception:
        logger.warning("Failed to collect metrics from registry", exc_info=True)
        return []

    samples: list[MetricSample] = []
    for family in families:
        try:
            samples.extend(
                MetricSample(
                    name=sample.name,
                    type=family.type,
                    labels=dict(sample.labels or {}),
                    value=float(sample.value),
                    timestamp=now,
                )
                for sample in family.samples
            )
        except Exception:
            logger.warning(f"Failed to snapshot metric family '{family.name}'", exc_info=True)
    return samples


def resource_series(metrics: ExporterMetrics) -> list[MetricSample]:
    """Series of the resource gauges only, leaving out the exporter's own sync metrics."""
    return snapshot_registry(
        metrics.registry,
        prefix=metrics.prefix,
        exclude_prefixes=(f"{metrics.prefix}exporter_",),
    )
