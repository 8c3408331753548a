"""Shop catalogue HTTP client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from pawfuel.errors import ResourceUnavailableError


class CatalogClient(Protocol):
    """Interface for fetching the shop catalogue."""

    async def fetch_catalog(self) -> list[dict[str, object]]:
        """Return raw catalogue rows."""


@dataclass
class HttpxCatalogClient(CatalogClient):
    """HTTPX-backed catalogue client."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 15.0) -> "HttpxCatalogClient":
        """Create a catalogue client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_catalog(self) -> list[dict[str, object]]:
        """Fetch the catalogue JSON array."""
        response = await self.http_client.get(self.url, timeout=self.timeout_seconds)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ResourceUnavailableError("Catalogue payload must be a JSON array")
        return [row for row in payload if isinstance(row, dict)]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
