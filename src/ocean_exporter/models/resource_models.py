from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Account(BaseModel):
    droplet_limit: int
    floating_ip_limit: int
    volume_limit: int
    email: str
    email_verified: bool = False
    status: str
    uuid: str


class Balance(BaseModel):
    """Billing balance. The API sends every amount as a decimal string."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    account_balance: str
    month_to_date_balance: str
    month_to_date_usage: str
    generated_at: str


class DropletStatus(str, Enum):
    NEW = "new"
    ACTIVE = "active"
    OFF = "off"
    ARCHIVE = "archive"


class Region(BaseModel):
    name: str
    slug: str


class DropletSize(BaseModel):
    slug: str
    memory: int
    vcpus: int
    disk: int
    transfer: float
    price_monthly: float
    price_hourly: float
    description: str = ""


class Droplet(BaseModel):
    """A droplet as listed by ``GET /droplets``.

    ``status`` is kept as a plain string so an enumerant the API adds later
    still decodes; mappers compare it against :class:`DropletStatus`.
    """

    id: int
    name: str
    memory: int
    vcpus: int
    disk: int
    locked: bool = False
    status: str
    created_at: str
    size: DropletSize
    region: Region


class FloatingIp(BaseModel):
    ip: str
    region: Region
    locked: bool = False


class Vpc(BaseModel):
    id: str
    urn: str
    name: str
    description: str = ""
    region: str
    ip_range: str
    default: bool = False
    created_at: str


class CdnEndpoint(BaseModel):
    id: str
    origin: str
    endpoint: str
    ttl: int
    certificate_id: str = ""
    custom_domain: str = ""
    created_at: str
