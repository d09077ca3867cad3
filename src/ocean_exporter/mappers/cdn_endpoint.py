from ocean_exporter.models.resource_models import CdnEndpoint
from ocean_exporter.models.sync_models import GaugeSpec, Observation

CDN_ENDPOINT = GaugeSpec(
    "cdn_endpoint",
    "Information about a CDN-Endpoint",
    ("id", "origin", "endpoint", "ttl", "custom_domain"),
)

GAUGES = (CDN_ENDPOINT,)


def map_cdn_endpoints(endpoints: list[CdnEndpoint]) -> list[Observation]:
    return [
        Observation(
            CDN_ENDPOINT.name,
            1,
            (endpoint.id, endpoint.origin, endpoint.endpoint, str(endpoint.ttl), endpoint.custom_domain),
        )
        for endpoint in endpoints
    ]
