"""Async client for the partner REST API.

Only the read endpoints that feed search-select controls are covered:
partner search, address search and the country list.
"""

from typing import Any, Dict, List, Optional

import httpx

from ..config import ApiConfig
from ..errors import ApiError


class PartnerApiClient:
    """Thin ``httpx.AsyncClient`` wrapper around the partner API."""

    def __init__(self, config: ApiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=self._headers(),
            transport=transport,
        )

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    async def _get(self, path: str, search: Optional[str] = None) -> Any:
        params = {"search": search} if search and search.strip() else None
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                f"GET {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(f"GET {path} failed: {e}") from e
        return response.json()

    async def search_partners(self, term: str = "") -> List[Dict[str, Any]]:
        return await self._get("/api/partner", term)

    async def search_addresses(self, term: str = "") -> List[Dict[str, Any]]:
        return await self._get("/api/address", term)

    async def list_countries(self) -> List[Dict[str, Any]]:
        return await self._get("/api/address/countries")

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "PartnerApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
