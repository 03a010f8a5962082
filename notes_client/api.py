"""
Notes Client — HTTP API Wrapper
================================

Async httpx client for the four note endpoints. Every non-2xx response is
raised as httpx.HTTPStatusError; transport failures surface as the usual
httpx.HTTPError subclasses.

Usage:
    async with NotesApi("http://localhost:8080/api") as api:
        notes = await api.list_notes()
        note = await api.create_note("buy milk")
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

Note = Dict[str, Any]


class NotesApi:
    """HTTP client for the Notes API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url:  Absolute URL the endpoint paths are appended to
                       (e.g. http://host:8080/api).
            timeout:   Request timeout in seconds.
            transport: Custom httpx transport (ASGI app, mock) for tests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "NotesApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise for non-2xx statuses."""
        client = await self._get_client()
        logger.debug("API request %s %s", method, path)
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug("API request %s %s failed: %s", method, path, e)
            raise
        logger.debug("API response %s %s %d", method, path, response.status_code)
        return response

    async def list_notes(self) -> List[Note]:
        response = await self.request("GET", "/list")
        return response.json()

    async def create_note(self, text: str, color: str = "") -> Note:
        response = await self.request("POST", "/create", json={"text": text, "color": color})
        return response.json()

    async def update_note(self, note_id: str, text: str, color: Optional[str] = None) -> Note:
        payload: Dict[str, Any] = {"text": text}
        if color is not None:
            payload["color"] = color
        response = await self.request("PUT", f"/update/{note_id}", json=payload)
        return response.json()

    async def delete_note(self, note_id: str) -> Dict[str, Any]:
        response = await self.request("DELETE", f"/delete/{note_id}")
        return response.json()
