import pytest
from prometheus_client import CollectorRegistry

from factories import FakeFetcher
from ocean_exporter.telemetry.metric_registry import ExporterMetrics


@pytest.fixture
def fresh_registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(fresh_registry):
    return ExporterMetrics(registry=fresh_registry, prefix="digitalocean_")


@pytest.fixture
def fetcher():
    return FakeFetcher()
