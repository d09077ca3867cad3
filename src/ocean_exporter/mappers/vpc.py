from ocean_exporter.models.resource_models import Vpc
from ocean_exporter.models.sync_models import GaugeSpec, Observation

VPC = GaugeSpec("vpc", "Information about a VPC", ("id", "name", "region", "ip_range"))

GAUGES = (VPC,)


def map_vpcs(vpcs: list[Vpc]) -> list[Observation]:
    return [Observation(VPC.name, 1, (vpc.id, vpc.name, vpc.region, vpc.ip_range)) for vpc in vpcs]
