from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from ocean_exporter.resource_kinds import ResourceKind


@dataclass(frozen=True)
class GaugeSpec:
    """Static definition of one gauge in a resource kind's metric schema."""

    name: str
    documentation: str
    labelnames: tuple[str, ...] = ()


@dataclass(frozen=True)
class Observation:
    """One (label values -> value) pair a mapper produced for a named gauge."""

    gauge: str
    value: float
    labelvalues: tuple[str, ...] = ()


class SyncStatus(str, Enum):
    APPLIED = "applied"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one fetch-map-apply run for a single resource kind."""

    kind: ResourceKind
    status: SyncStatus
    count: int = 0
    reason: str | None = None

    @classmethod
    def applied(cls, kind: ResourceKind, count: int) -> SyncResult:
        return cls(kind=kind, status=SyncStatus.APPLIED, count=count)

    @classmethod
    def failed(cls, kind: ResourceKind, reason: str) -> SyncResult:
        return cls(kind=kind, status=SyncStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is SyncStatus.APPLIED


class MetricSample(BaseModel):
    """A single sample read back from a prometheus CollectorRegistry."""

    name: str
    type: str  # "counter", "gauge", "histogram", "summary"
    labels: dict[str, str] = {}
    value: float
    timestamp: datetime
