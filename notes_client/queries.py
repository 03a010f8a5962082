"""
Notes Client — Notes Query & Mutations
=======================================

What:  The data layer a UI binds to.
         NotesQuery          — list of notes under the ("notes",) key
         CreateNoteMutation  — POST /create
         UpdateNoteMutation  — PUT /update/{id}
         DeleteNoteMutation  — DELETE /delete/{id}
How:   Each mutation, on success, invalidates ("notes",). The refetch runs in
       the background; mutate() returns as soon as the HTTP call is done.
       No optimistic updates.

Consumers only see booleans for failure (`is_error`); error details go to
the log.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from notes_client.api import Note, NotesApi
from notes_client.cache import QueryClient, QueryKey, QueryState, QueryStatus

logger = logging.getLogger(__name__)

NOTES_QUERY_KEY: QueryKey = ("notes",)


class NotesQuery:
    """
    The note list, as `(data, is_loading, is_error)`.

    `data` is `[]` until the first successful fetch.
    """

    def __init__(self, query_client: QueryClient, api: NotesApi):
        self.query_client = query_client
        self.api = api
        query_client.register(NOTES_QUERY_KEY, api.list_notes)

    @property
    def state(self) -> QueryState:
        return self.query_client.get_state(NOTES_QUERY_KEY)

    @property
    def data(self) -> List[Note]:
        return self.state.data or []

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def is_error(self) -> bool:
        return self.state.is_error

    async def fetch(self) -> List[Note]:
        await self.query_client.fetch(NOTES_QUERY_KEY)
        return self.data

    def subscribe(self, observer: Callable[[QueryState], None]) -> Callable[[], None]:
        return self.query_client.subscribe(NOTES_QUERY_KEY, observer)


class NoteMutation:
    """
    Base for the three note mutations.

    Subclasses implement `_perform`. The mutation tracks its own
    idle → loading → success/error status, independent of the query.
    """

    def __init__(self, query_client: QueryClient, api: NotesApi):
        self.query_client = query_client
        self.api = api
        self.status = QueryStatus.IDLE
        self.data: Optional[Dict[str, Any]] = None

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    async def _perform(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        raise NotImplementedError

    async def mutate(self, *args: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
        """
        Run the mutation; on success invalidate the notes query.

        Returns the server's JSON body, or None when the request failed
        (then `is_error` is True).
        """
        self.status = QueryStatus.LOADING
        try:
            result = await self._perform(*args, **kwargs)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: a 2xx body that is not JSON (e.g. a proxy error page)
            logger.warning("%s failed: %s", type(self).__name__, e)
            self.status = QueryStatus.ERROR
            self.data = None
            return None

        self.status = QueryStatus.SUCCESS
        self.data = result
        self.query_client.invalidate(NOTES_QUERY_KEY)
        return result


class CreateNoteMutation(NoteMutation):
    async def _perform(self, text: str, color: str = "") -> Note:
        return await self.api.create_note(text, color)


class UpdateNoteMutation(NoteMutation):
    async def _perform(self, note_id: str, text: str, color: Optional[str] = None) -> Note:
        return await self.api.update_note(note_id, text, color)


class DeleteNoteMutation(NoteMutation):
    async def _perform(self, note_id: str) -> Dict[str, Any]:
        return await self.api.delete_note(note_id)
