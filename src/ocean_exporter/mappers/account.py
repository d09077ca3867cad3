from ocean_exporter.models.resource_models import Account
from ocean_exporter.models.sync_models import GaugeSpec, Observation

DROPLET_LIMIT = GaugeSpec("droplet_limit", "The Number of Droplets your Account is allowed to have")
FLOATING_IP_LIMIT = GaugeSpec("floating_ip_limit", "The Number of Floating-IPs your Account is allowed to have")
VOLUME_LIMIT = GaugeSpec("volume_limit", "The Number of Volumes your Account is allowed to have")

GAUGES = (DROPLET_LIMIT, FLOATING_IP_LIMIT, VOLUME_LIMIT)


def map_account(account: Account) -> list[Observation]:
    return [
        Observation(DROPLET_LIMIT.name, account.droplet_limit),
        Observation(FLOATING_IP_LIMIT.name, account.floating_ip_limit),
        Observation(VOLUME_LIMIT.name, account.volume_limit),
    ]
