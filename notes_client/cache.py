"""
Notes Client — Query Cache
===========================

What:  A small keyed cache of query results with invalidate-and-refetch.
Why:   Mutations never patch cached data. They invalidate the query key and
       the cache refetches from the server, so what the caller sees is
       always server state (eventually, once the refetch completes).

State machine (per key):
    idle ──fetch──▶ loading ──▶ success
                           └──▶ error
    success/error ──invalidate──▶ loading ──▶ success | error

Message passing:
    Observers subscribe to a key and are called with the new QueryState on
    every transition. invalidate() returns immediately; the refetch runs as
    a background asyncio task.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

QueryKey = Tuple[str, ...]
Fetcher = Callable[[], Awaitable[Any]]
Observer = Callable[["QueryState"], None]


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState:
    """
    Snapshot of one query.

    Error details are not kept: consumers only learn that the last fetch
    failed. `data` keeps the last successful result across refetches.
    """
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    is_stale: bool = False

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS


@dataclass
class _Query:
    fetcher: Fetcher
    state: QueryState = field(default_factory=QueryState)
    observers: List[Observer] = field(default_factory=list)
    in_flight: Optional["asyncio.Task[QueryState]"] = None
    generation: int = 0


class QueryClient:
    """
    Holds query states by key and coordinates (re)fetching.

    Concurrent fetches of the same key share one in-flight task. An
    invalidation always starts a new run; a run that was superseded while
    in flight discards its result and resolves to the newer run.
    """

    def __init__(self) -> None:
        self._queries: Dict[QueryKey, _Query] = {}
        self._background: Set["asyncio.Task[QueryState]"] = set()

    def register(self, key: QueryKey, fetcher: Fetcher) -> None:
        """Attach the function that loads `key`. Re-registering replaces it."""
        query = self._queries.get(key)
        if query is None:
            self._queries[key] = _Query(fetcher=fetcher)
        else:
            query.fetcher = fetcher

    def _get(self, key: QueryKey) -> _Query:
        try:
            return self._queries[key]
        except KeyError:
            raise KeyError(f"No query registered for key {key!r}") from None

    def get_state(self, key: QueryKey) -> QueryState:
        query = self._queries.get(key)
        return query.state if query else QueryState()

    def subscribe(self, key: QueryKey, observer: Observer) -> Callable[[], None]:
        """Call `observer` on every state change of `key`; returns an unsubscribe function."""
        query = self._get(key)
        query.observers.append(observer)

        def unsubscribe() -> None:
            if observer in query.observers:
                query.observers.remove(observer)

        return unsubscribe

    def _set_state(self, key: QueryKey, query: _Query, state: QueryState) -> None:
        query.state = state
        for observer in list(query.observers):
            observer(state)

    def _start(self, key: QueryKey, query: _Query) -> "asyncio.Task[QueryState]":
        query.generation += 1
        query.in_flight = asyncio.ensure_future(self._run(key, query, query.generation))
        return query.in_flight

    async def fetch(self, key: QueryKey) -> QueryState:
        """Load `key`, joining a fetch already in progress."""
        query = self._get(key)
        if query.in_flight is None or query.in_flight.done():
            self._start(key, query)
        return await asyncio.shield(query.in_flight)

    async def _run(self, key: QueryKey, query: _Query, generation: int) -> QueryState:
        self._set_state(key, query, replace(query.state, status=QueryStatus.LOADING))
        try:
            data = await query.fetcher()
        except Exception as e:
            if generation == query.generation:
                logger.warning("Query %r failed: %s", key, e)
                self._set_state(
                    key, query, replace(query.state, status=QueryStatus.ERROR, is_stale=False)
                )
        else:
            if generation == query.generation:
                self._set_state(key, query, QueryState(status=QueryStatus.SUCCESS, data=data))

        if generation != query.generation:
            # Superseded by invalidate(): the result may predate the mutation
            return await asyncio.shield(query.in_flight)
        return query.state

    def invalidate(self, key: QueryKey) -> Optional["asyncio.Task[QueryState]"]:
        """
        Mark `key` stale and schedule a fresh refetch without waiting for it.

        A fetch already in flight is not reused: it may have read the server
        before the change that triggered the invalidation.

        Returns the background task, or None when nothing is registered
        under `key`.
        """
        query = self._queries.get(key)
        if query is None:
            return None
        self._set_state(key, query, replace(query.state, is_stale=True))
        task = self._start(key, query)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def settle(self) -> None:
        """Wait until every scheduled refetch has finished."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
