"""
Notes Client — Client-Side Data Layer
======================================

What:  Everything a front end needs to show and edit notes: one list query
       and three mutations sharing a query cache.

Usage:
    async with NotesClient.from_settings() as client:
        await client.notes.fetch()
        await client.create.mutate("buy milk")
        await client.query_client.settle()   # wait for the refetch
        print(client.notes.data)
"""

from typing import Any, Mapping, Optional

import httpx

from notes_client.api import NotesApi
from notes_client.cache import QueryClient, QueryState, QueryStatus
from notes_client.config import ClientSettings, join_origin, resolve_base_url
from notes_client.queries import (
    NOTES_QUERY_KEY,
    CreateNoteMutation,
    DeleteNoteMutation,
    NotesQuery,
    UpdateNoteMutation,
)

__all__ = [
    "ClientSettings",
    "CreateNoteMutation",
    "DeleteNoteMutation",
    "NOTES_QUERY_KEY",
    "NotesApi",
    "NotesClient",
    "NotesQuery",
    "QueryClient",
    "QueryState",
    "QueryStatus",
    "UpdateNoteMutation",
]


class NotesClient:
    """Wires one NotesApi and one QueryClient to the query and mutations."""

    def __init__(self, api: NotesApi, query_client: Optional[QueryClient] = None):
        self.api = api
        self.query_client = query_client or QueryClient()
        self.notes = NotesQuery(self.query_client, api)
        self.create = CreateNoteMutation(self.query_client, api)
        self.update = UpdateNoteMutation(self.query_client, api)
        self.delete = DeleteNoteMutation(self.query_client, api)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClientSettings] = None,
        runtime_config: Optional[Mapping[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "NotesClient":
        """Build a client whose base URL follows runtime config → env → same origin."""
        settings = settings or ClientSettings()
        base_url = resolve_base_url(runtime_config=runtime_config, settings=settings)
        api = NotesApi(
            join_origin(settings.mip_origin, base_url),
            timeout=settings.mip_request_timeout,
            transport=transport,
        )
        return cls(api)

    async def close(self) -> None:
        await self.query_client.settle()
        await self.api.close()

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
