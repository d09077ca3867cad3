"""Resource factories and an in-memory fetcher shared by the tests."""

from __future__ import annotations

from ocean_exporter.models.resource_models import Account, Balance, CdnEndpoint, Droplet, FloatingIp, Vpc


def droplet_payload(**kwargs) -> dict:
    defaults = dict(
        id=1,
        name="web-1",
        memory=1024,
        vcpus=1,
        disk=25,
        locked=False,
        status="active",
        created_at="2024-01-01T00:00:00Z",
        size=dict(
            slug="s-1vcpu-1gb",
            memory=1024,
            vcpus=1,
            disk=25,
            transfer=1.0,
            price_monthly=6.0,
            price_hourly=0.00893,
            description="Basic",
        ),
        region=dict(name="New York 1", slug="nyc1"),
    )
    defaults.update(kwargs)
    return defaults


def make_droplet(**kwargs) -> Droplet:
    return Droplet.model_validate(droplet_payload(**kwargs))


def make_account(**kwargs) -> Account:
    defaults = dict(
        droplet_limit=25,
        floating_ip_limit=3,
        volume_limit=100,
        email="ops@example.com",
        email_verified=True,
        status="active",
        uuid="b6fr89dbf6d9156cace5f3c78dc9851d957381ef",
    )
    defaults.update(kwargs)
    return Account(**defaults)


def make_balance(**kwargs) -> Balance:
    defaults = dict(
        account_balance="12.50",
        month_to_date_balance="20.25",
        month_to_date_usage="7.75",
        generated_at="2024-01-15T12:00:00Z",
    )
    defaults.update(kwargs)
    return Balance(**defaults)


def make_floating_ip(ip: str = "45.55.96.47", region: str = "nyc3") -> FloatingIp:
    return FloatingIp(ip=ip, region={"name": region.upper(), "slug": region})


def make_vpc(**kwargs) -> Vpc:
    defaults = dict(
        id="5a4981aa-9653-4bd1-bef5-d6bff52042e4",
        urn="do:vpc:5a4981aa-9653-4bd1-bef5-d6bff52042e4",
        name="env.prod-vpc",
        description="production",
        region="nyc1",
        ip_range="10.10.10.0/24",
        default=False,
        created_at="2020-03-13T19:20:47.442049222Z",
    )
    defaults.update(kwargs)
    return Vpc(**defaults)


def make_cdn_endpoint(**kwargs) -> CdnEndpoint:
    defaults = dict(
        id="19f06b6a-3ace-4315-b086-499a0e521b76",
        origin="static-images.nyc3.digitaloceanspaces.com",
        endpoint="static-images.nyc3.cdn.digitaloceanspaces.com",
        ttl=3600,
        certificate_id="",
        custom_domain="",
        created_at="2018-07-19T15:04:16Z",
    )
    defaults.update(kwargs)
    return CdnEndpoint(**defaults)


class FakeFetcher:
    """In-memory ResourceFetcher.

    Each attribute holds either the collection to return or an exception
    instance to raise. ``calls`` counts invocations per method.
    """

    def __init__(self):
        self.account = make_account()
        self.balance = make_balance()
        self.droplets = [make_droplet()]
        self.floating_ips = [make_floating_ip()]
        self.vpcs = [make_vpc()]
        self.cdn_endpoints = [make_cdn_endpoint()]
        self.calls: dict[str, int] = {}

    async def _respond(self, name: str):
        self.calls[name] = self.calls.get(name, 0) + 1
        value = getattr(self, name)
        if isinstance(value, BaseException):
            raise value
        return value

    async def get_account(self):
        return await self._respond("account")

    async def get_balance(self):
        return await self._respond("balance")

    async def get_droplets(self):
        return await self._respond("droplets")

    async def get_floating_ips(self):
        return await self._respond("floating_ips")

    async def get_vpcs(self):
        return await self._respond("vpcs")

    async def get_cdn_endpoints(self):
        return await self._respond("cdn_endpoints")
