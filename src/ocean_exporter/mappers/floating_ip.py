from ocean_exporter.models.resource_models import FloatingIp
from ocean_exporter.models.sync_models import GaugeSpec, Observation

FLOATING_IP = GaugeSpec("floating_ip", "Information about a Floating-IP", ("ip", "region"))

GAUGES = (FLOATING_IP,)


def map_floating_ips(floating_ips: list[FloatingIp]) -> list[Observation]:
    return [Observation(FLOATING_IP.name, 1, (fip.ip, fip.region.slug)) for fip in floating_ips]
