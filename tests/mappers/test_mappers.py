"""Behavioral tests for the per-kind metric mappers."""

import pytest

from factories import make_account, make_balance, make_cdn_endpoint, make_droplet, make_floating_ip, make_vpc
from ocean_exporter.mappers.account import map_account
from ocean_exporter.mappers.balance import map_balance, parse_decimal
from ocean_exporter.mappers.cdn_endpoint import map_cdn_endpoints
from ocean_exporter.mappers.droplets import GAUGES as DROPLET_GAUGES
from ocean_exporter.mappers.droplets import map_droplets
from ocean_exporter.mappers.floating_ip import map_floating_ips
from ocean_exporter.mappers.vpc import map_vpcs
from ocean_exporter.models.sync_models import Observation
from ocean_exporter.utils.exceptions import FieldParseError


def _by_gauge(observations: list[Observation]) -> dict[str, dict[tuple[str, ...], float]]:
    grouped: dict[str, dict[tuple[str, ...], float]] = {}
    for o in observations:
        grouped.setdefault(o.gauge, {})[o.labelvalues] = o.value
    return grouped


class TestDropletMapper:
    def test_two_droplets_active_and_off(self):
        droplets = [
            make_droplet(id=1, name="web-1", status="active", region={"name": "New York 1", "slug": "nyc1"}),
            make_droplet(
                id=2,
                name="db-1",
                status="off",
                vcpus=2,
                memory=4096,
                disk=80,
                region={"name": "Frankfurt 1", "slug": "fra1"},
            ),
        ]

        grouped = _by_gauge(map_droplets(droplets))

        assert grouped["droplet_up"] == {("1", "web-1", "nyc1"): 1, ("2", "db-1", "fra1"): 0}
        assert grouped["droplet_vcpus"][("2", "db-1", "fra1")] == 2
        assert grouped["droplet_memory"][("2", "db-1", "fra1")] == 4096
        assert grouped["droplet_disk"][("2", "db-1", "fra1")] == 80
        assert grouped["droplet_transfer"][("1", "web-1", "nyc1")] == 1.0
        assert grouped["droplet_price_monthly"][("1", "web-1", "nyc1")] == 6.0
        assert grouped["droplet_price_hourly"][("1", "web-1", "nyc1")] == pytest.approx(0.00893)

    def test_every_gauge_gets_one_series_per_droplet(self):
        droplets = [make_droplet(id=i, name=f"node-{i}") for i in range(3)]
        grouped = _by_gauge(map_droplets(droplets))

        assert set(grouped) == {g.name for g in DROPLET_GAUGES}
        assert all(len(series) == 3 for series in grouped.values())

    @pytest.mark.parametrize("status", ["new", "archive", "off", "rebooting"])
    def test_not_running_statuses_map_to_zero(self, status):
        """Known non-active and unrecognized statuses both report up=0 instead of being dropped."""
        grouped = _by_gauge(map_droplets([make_droplet(status=status)]))
        assert grouped["droplet_up"] == {("1", "web-1", "nyc1"): 0}

    def test_empty_collection(self):
        assert map_droplets([]) == []


class TestPresenceMappers:
    def test_floating_ips(self):
        observations = map_floating_ips([make_floating_ip("1.2.3.4", "nyc3"), make_floating_ip("5.6.7.8", "ams3")])
        assert observations == [
            Observation("floating_ip", 1, ("1.2.3.4", "nyc3")),
            Observation("floating_ip", 1, ("5.6.7.8", "ams3")),
        ]

    def test_vpcs(self):
        vpc = make_vpc(id="vpc-1", name="prod", region="fra1", ip_range="10.0.0.0/16")
        assert map_vpcs([vpc]) == [Observation("vpc", 1, ("vpc-1", "prod", "fra1", "10.0.0.0/16"))]

    def test_cdn_endpoint_labels_pass_through_verbatim(self):
        endpoint = make_cdn_endpoint(id="cdn-1", origin="o.example", endpoint="e.example", ttl=600, custom_domain="")
        assert map_cdn_endpoints([endpoint]) == [
            Observation("cdn_endpoint", 1, ("cdn-1", "o.example", "e.example", "600", ""))
        ]


class TestSingletonMappers:
    def test_account_limits(self):
        grouped = _by_gauge(map_account(make_account(droplet_limit=10, floating_ip_limit=2, volume_limit=50)))
        assert grouped == {
            "droplet_limit": {(): 10},
            "floating_ip_limit": {(): 2},
            "volume_limit": {(): 50},
        }

    def test_balance_all_fields(self):
        grouped = _by_gauge(map_balance(make_balance()))
        assert grouped == {
            "account_balance": {(): 12.5},
            "month_to_date_balance": {(): 20.25},
            "month_to_date_usage": {(): 7.75},
        }

    def test_balance_skips_unparsable_field(self):
        observations = map_balance(make_balance(account_balance="12.50", month_to_date_usage="not-a-number"))
        gauges = {o.gauge: o.value for o in observations}

        assert gauges["account_balance"] == 12.5
        assert "month_to_date_usage" not in gauges
        assert "month_to_date_balance" in gauges

    def test_negative_balance_is_a_credit(self):
        observations = map_balance(make_balance(account_balance="-3.10"))
        assert Observation("account_balance", -3.1) in observations


class TestParseDecimal:
    def test_parses_padded_value(self):
        assert parse_decimal("account_balance", " 0.00 ") == 0.0

    @pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "1,000.00"])
    def test_rejects(self, raw):
        with pytest.raises(FieldParseError) as exc_info:
            parse_decimal("month_to_date_usage", raw)
        assert exc_info.value.field_name == "month_to_date_usage"
