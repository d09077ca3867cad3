from ocean_exporter.models.resource_models import Droplet, DropletStatus
from ocean_exporter.models.sync_models import GaugeSpec, Observation

LABELS = ("id", "name", "region")

DROPLET_UP = GaugeSpec("droplet_up", "If a given Droplet is currently running", LABELS)
DROPLET_VCPUS = GaugeSpec("droplet_vcpus", "The Number of VCPUs for a given Droplet", LABELS)
DROPLET_MEMORY = GaugeSpec("droplet_memory", "The Memory for a given Droplet", LABELS)
DROPLET_DISK = GaugeSpec("droplet_disk", "The Disk size for a given Droplet", LABELS)
DROPLET_TRANSFER = GaugeSpec("droplet_transfer", "The Transfer for a given Droplet", LABELS)
DROPLET_PRICE_MONTHLY = GaugeSpec("droplet_price_monthly", "The Monthly Price for a given Droplet", LABELS)
DROPLET_PRICE_HOURLY = GaugeSpec("droplet_price_hourly", "The Hourly Price for a given Droplet", LABELS)

GAUGES = (
    DROPLET_UP,
    DROPLET_VCPUS,
    DROPLET_MEMORY,
    DROPLET_DISK,
    DROPLET_TRANSFER,
    DROPLET_PRICE_MONTHLY,
    DROPLET_PRICE_HOURLY,
)


def droplet_up(droplet: Droplet) -> int:
    # unknown statuses count as not running
    return 1 if droplet.status == DropletStatus.ACTIVE.value else 0


def map_droplets(droplets: list[Droplet]) -> list[Observation]:
    observations: list[Observation] = []
    for droplet in droplets:
        labels = (str(droplet.id), droplet.name, droplet.region.slug)
        observations.extend(
            [
                Observation(DROPLET_UP.name, droplet_up(droplet), labels),
                Observation(DROPLET_VCPUS.name, droplet.vcpus, labels),
                Observation(DROPLET_MEMORY.name, droplet.memory, labels),
                Observation(DROPLET_DISK.name, droplet.disk, labels),
                Observation(DROPLET_TRANSFER.name, droplet.size.transfer, labels),
                Observation(DROPLET_PRICE_MONTHLY.name, droplet.size.price_monthly, labels),
                Observation(DROPLET_PRICE_HOURLY.name, droplet.size.price_hourly, labels),
            ]
        )
    return observations
