"""DigitalOcean REST API client used as the exporter's resource fetcher."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, TypeVar

import aiohttp
from loguru import logger
from pydantic import BaseModel, ValidationError

from ocean_exporter import settings
from ocean_exporter.models.resource_models import Account, Balance, CdnEndpoint, Droplet, FloatingIp, Vpc
from ocean_exporter.utils.exceptions import DecodeError, ResponseStatusError, TransportError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceFetcher(Protocol):
    """One independent read per resource kind. Implementations raise FetchError subclasses."""

    async def get_account(self) -> Account: ...

    async def get_balance(self) -> Balance: ...

    async def get_droplets(self) -> list[Droplet]: ...

    async def get_floating_ips(self) -> list[FloatingIp]: ...

    async def get_vpcs(self) -> list[Vpc]: ...

    async def get_cdn_endpoints(self) -> list[CdnEndpoint]: ...


class DigitalOceanClient:
    """Authenticated, read-only DigitalOcean API client.

    Every request is bounded by ``timeout_sec``. The client never retries:
    retry policy belongs to the sync engine. Only ``200 OK`` counts as
    success, so an empty collection is only ever returned when the API
    actually listed zero items.
    """

    def __init__(
        self,
        token: str,
        base_url: str = settings.DIGITALOCEAN_API_URL,
        timeout_sec: float = settings.REQUEST_TIMEOUT_SEC,
        page_size: int = settings.PAGE_SIZE,
        max_pages: int = settings.MAX_PAGES,
        session: aiohttp.ClientSession | None = None,
    ):
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self.page_size = page_size
        self.max_pages = max_pages
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> DigitalOceanClient:
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_sec),
                headers={"Accept": "application/json"},
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a resource and return the decoded JSON object."""
        if not self.session:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = self._url(path)
        headers = {"Authorization": f"Bearer {self._token}"}
        timeout = aiohttp.ClientTimeout(total=self.timeout_sec)

        try:
            async with self.session.get(url, params=params, headers=headers, timeout=timeout) as response:
                if response.status != 200:
                    body = await response.text()
                    raise ResponseStatusError(path, response.status, body[:200])
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeError(path, f"response is not valid JSON: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(path, f"{type(e).__name__}: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError(path, f"expected a JSON object, got {type(payload).__name__}")
        return payload

    async def _get_object(self, path: str, model: type[ModelT], key: str | None = None) -> ModelT:
        payload = await self.get(path)
        if key is not None:
            if key not in payload:
                raise DecodeError(path, f"missing '{key}' in response")
            payload = payload[key]
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(path, f"invalid {model.__name__}: {e}") from e

    async def _get_collection(self, path: str, model: type[ModelT], key: str) -> list[ModelT]:
        """Load every page of a collection endpoint."""
        items: list[ModelT] = []
        next_url: str | None = path
        params: dict[str, Any] | None = {"per_page": self.page_size}
        pages = 0

        while next_url:
            if pages >= self.max_pages:
                raise DecodeError(path, f"more than {self.max_pages} pages, refusing partial collection")
            payload = await self.get(next_url, params=params)
            pages += 1

            if key not in payload:
                raise DecodeError(path, f"missing '{key}' in response")
            raw_items = payload[key]
            if raw_items is None:
                raise DecodeError(path, f"'{key}' is null")
            if not isinstance(raw_items, list):
                raise DecodeError(path, f"expected '{key}' to be a list, got {type(raw_items).__name__}")
            try:
                items.extend(model.model_validate(raw) for raw in raw_items)
            except ValidationError as e:
                raise DecodeError(path, f"invalid {model.__name__}: {e}") from e

            next_url = _next_page(payload)
            # the next link already carries page and per_page
            params = None

        logger.debug(f"Loaded {len(items)} {key} from {path} ({pages} page(s))")
        return items

    async def get_account(self) -> Account:
        return await self._get_object("/account", Account, key="account")

    async def get_balance(self) -> Balance:
        return await self._get_object("/customers/my/balance", Balance)

    async def get_droplets(self) -> list[Droplet]:
        return await self._get_collection("/droplets", Droplet, key="droplets")

    async def get_floating_ips(self) -> list[FloatingIp]:
        return await self._get_collection("/floating_ips", FloatingIp, key="floating_ips")

    async def get_vpcs(self) -> list[Vpc]:
        return await self._get_collection("/vpcs", Vpc, key="vpcs")

    async def get_cdn_endpoints(self) -> list[CdnEndpoint]:
        return await self._get_collection("/cdn/endpoints", CdnEndpoint, key="endpoints")


def _next_page(payload: dict[str, Any]) -> str | None:
    links = payload.get("links")
    if not isinstance(links, dict):
        return None
    pages = links.get("pages")
    if not isinstance(pages, dict):
        return None
    next_url = pages.get("next")
    return next_url if isinstance(next_url, str) and next_url else None
