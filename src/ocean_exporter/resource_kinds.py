"""The closed set of resource kinds and how each one is fetched and mapped."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from operator import methodcaller
from typing import Any, Awaitable, Callable

from ocean_exporter.mappers import account, balance, cdn_endpoint, droplets, floating_ip, vpc
from ocean_exporter.models.sync_models import GaugeSpec, Observation


class ResourceKind(str, Enum):
    ACCOUNT = "account"
    BALANCE = "balance"
    DROPLETS = "droplets"
    FLOATING_IPS = "floating_ips"
    VPCS = "vpcs"
    CDN_ENDPOINTS = "cdn_endpoints"


@dataclass(frozen=True)
class KindSpec:
    """Everything the sync engine needs to refresh one resource kind.

    ``fetch`` takes any ResourceFetcher and returns the awaitable read for
    this kind. ``singleton`` kinds have no label identity: their gauges are
    overwritten in place instead of being reset and replaced.
    """

    kind: ResourceKind
    fetch: Callable[[Any], Awaitable[Any]]
    mapper: Callable[[Any], list[Observation]]
    gauges: tuple[GaugeSpec, ...]
    singleton: bool = False

    def record_count(self, collection: Any) -> int:
        return 1 if self.singleton else len(collection)


RESOURCE_KINDS: dict[ResourceKind, KindSpec] = {
    spec.kind: spec
    for spec in (
        KindSpec(
            kind=ResourceKind.ACCOUNT,
            fetch=methodcaller("get_account"),
            mapper=account.map_account,
            gauges=account.GAUGES,
            singleton=True,
        ),
        KindSpec(
            kind=ResourceKind.BALANCE,
            fetch=methodcaller("get_balance"),
            mapper=balance.map_balance,
            gauges=balance.GAUGES,
            singleton=True,
        ),
        KindSpec(
            kind=ResourceKind.DROPLETS,
            fetch=methodcaller("get_droplets"),
            mapper=droplets.map_droplets,
            gauges=droplets.GAUGES,
        ),
        KindSpec(
            kind=ResourceKind.FLOATING_IPS,
            fetch=methodcaller("get_floating_ips"),
            mapper=floating_ip.map_floating_ips,
            gauges=floating_ip.GAUGES,
        ),
        KindSpec(
            kind=ResourceKind.VPCS,
            fetch=methodcaller("get_vpcs"),
            mapper=vpc.map_vpcs,
            gauges=vpc.GAUGES,
        ),
        KindSpec(
            kind=ResourceKind.CDN_ENDPOINTS,
            fetch=methodcaller("get_cdn_endpoints"),
            mapper=cdn_endpoint.map_cdn_endpoints,
            gauges=cdn_endpoint.GAUGES,
        ),
    )
}
