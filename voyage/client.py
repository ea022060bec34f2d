# FILE: voyage/client.py
"""
HTTP client for the Voyage memories API

Credentials are passed per call: the bearer token travels in that request's
headers only and the shared httpx client never carries auth state.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import httpx

from voyage.config import get_settings

logger = logging.getLogger(__name__)


class VoyageAPIError(Exception):
    """Non-2xx response from the Voyage API"""

    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _serialize(memory_data: Dict[str, Any]) -> Dict[str, Any]:
    """Dates go over the wire as YYYY-MM-DD strings"""
    return {
        key: VoyageClient.format_date(value) if isinstance(value, date) else value
        for key, value in memory_data.items()
    }


class VoyageClient:
    """Async client for the memories endpoints"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.client_timeout,
            transport=transport
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"}
        response = await self._client.request(method, path, params=params, json=json, headers=headers)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = body.get("message") or response.reason_phrase
            logger.error(f"Voyage API error: {method} {path} -> {response.status_code} {message}")
            raise VoyageAPIError(response.status_code, message, body.get("errors"))

        return response.json()

    async def get_memories(
        self,
        token: str,
        search: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None
    ) -> Dict[str, Any]:
        """Fetch {memories, groupedMemories} with optional filters (month is 0-based)"""
        params = {}
        if search:
            params["search"] = search
        if year is not None:
            params["year"] = str(year)
        if month is not None:
            params["month"] = str(month)
        return await self._request("GET", "/memories", token, params=params)

    async def get_memory(self, token: str, memory_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/memories/{memory_id}", token)
        return data["memory"]

    async def create_memory(self, token: str, memory_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("POST", "/memories", token, json=_serialize(memory_data))
        return data["memory"]

    async def update_memory(self, token: str, memory_id: str, memory_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("PUT", f"/memories/{memory_id}", token, json=_serialize(memory_data))
        return data["memory"]

    async def delete_memory(self, token: str, memory_id: str) -> None:
        await self._request("DELETE", f"/memories/{memory_id}", token)

    async def delete_all_memories(self, token: str) -> int:
        data = await self._request("DELETE", "/memories", token)
        return data["deletedCount"]

    @staticmethod
    def format_date(d: date) -> str:
        """YYYY-MM-DD, the format the API expects"""
        if isinstance(d, datetime):
            d = d.date()
        return d.isoformat()

    @staticmethod
    def parse_date(date_string: str) -> date:
        return date.fromisoformat(date_string[:10])
