from ocean_exporter.telemetry.gauge_family import GaugeFamily
from ocean_exporter.telemetry.metric_registry import ExporterMetrics
from ocean_exporter.telemetry.snapshot import resource_series, snapshot_registry

__all__ = ["ExporterMetrics", "GaugeFamily", "resource_series", "snapshot_registry"]
