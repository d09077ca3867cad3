"""Billing balance gauges.

The API encodes every amount as a decimal string. Each field is parsed on its
own: a field that does not parse is left out of the observations, so the
engine keeps whatever value that gauge had after the previous poll.
"""

import math

from loguru import logger

from ocean_exporter.models.resource_models import Balance
from ocean_exporter.models.sync_models import GaugeSpec, Observation
from ocean_exporter.utils.exceptions import FieldParseError

ACCOUNT_BALANCE = GaugeSpec("account_balance", "The current Account-Balance")
MONTH_TO_DATE_BALANCE = GaugeSpec(
    "month_to_date_balance",
    "The current Balance with the Usage of the Month already subtracted from the Account-Balance",
)
MONTH_TO_DATE_USAGE = GaugeSpec("month_to_date_usage", "The current Usage for this Month")

GAUGES = (ACCOUNT_BALANCE, MONTH_TO_DATE_BALANCE, MONTH_TO_DATE_USAGE)


def parse_decimal(field_name: str, raw: str) -> float:
    """Parse a decimal amount such as ``"12.50"`` or ``"-3.1"``."""
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError) as e:
        raise FieldParseError(field_name, raw) from e
    if not math.isfinite(value):
        raise FieldParseError(field_name, raw)
    return value


def map_balance(balance: Balance) -> list[Observation]:
    observations: list[Observation] = []
    for spec in GAUGES:
        raw = getattr(balance, spec.name)
        try:
            value = parse_decimal(spec.name, raw)
        except FieldParseError as e:
            logger.warning(f"Skipping {spec.name}, keeping previous value: {e}")
            continue
        observations.append(Observation(spec.name, value))
    return observations
