"""Labeled gauge family whose contents can be replaced atomically."""

from __future__ import annotations

import threading
from typing import Iterable, Iterator, Mapping

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

LabelValues = tuple[str, ...]


class GaugeFamily(Collector):
    """A gauge family registered as a custom prometheus collector.

    The current series live in one dict that is never mutated after it is
    published. Writers build the next dict off to the side and swap it in
    under ``_lock``; ``collect()`` grabs the reference under the same lock.
    A scrape therefore sees either the whole previous poll or the whole new
    one, never a family that was cleared but not yet repopulated.
    """

    def __init__(self, name: str, documentation: str, labelnames: Iterable[str] = ()):
        self.name = name
        self.documentation = documentation
        self.labelnames: tuple[str, ...] = tuple(labelnames)
        self._lock = threading.Lock()
        self._series: dict[LabelValues, float] = {}

    def _check(self, labelvalues: LabelValues) -> LabelValues:
        labelvalues = tuple(str(v) for v in labelvalues)
        if len(labelvalues) != len(self.labelnames):
            raise ValueError(
                f"{self.name} expects {len(self.labelnames)} label values {self.labelnames}, got {labelvalues!r}"
            )
        return labelvalues

    def replace(self, series: Mapping[LabelValues, float]) -> None:
        """Drop every current series and publish ``series`` as one visible step."""
        staged = {self._check(labelvalues): float(value) for labelvalues, value in series.items()}
        with self._lock:
            self._series = staged

    def set(self, value: float, labelvalues: LabelValues = ()) -> None:
        """Overwrite one series in place, leaving the others untouched."""
        labelvalues = self._check(labelvalues)
        with self._lock:
            staged = dict(self._series)
            staged[labelvalues] = float(value)
            self._series = staged

    def series(self) -> dict[LabelValues, float]:
        with self._lock:
            return dict(self._series)

    def __len__(self) -> int:
        with self._lock:
            return len(self._series)

    def _family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(self.name, self.documentation, labels=list(self.labelnames))

    def describe(self) -> list[Metric]:
        return [self._family()]

    def collect(self) -> Iterator[Metric]:
        with self._lock:
            current = self._series
        family = self._family()
        for labelvalues, value in current.items():
            family.add_metric(list(labelvalues), value)
        yield family
