"""
Notes Client — Query & Mutation Tests
======================================

What:  The client data layer against the real API (ASGITransport) and
       against canned responses (httpx.MockTransport).
"""

import httpx
import pytest

from notes_client import NOTES_QUERY_KEY, ClientSettings, NotesApi, NotesClient
from notes_client.cache import QueryClient, QueryStatus


@pytest.fixture
def client_settings(monkeypatch, tmp_path):
    monkeypatch.delenv("MIP_BACKEND_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    return ClientSettings(mip_origin="http://test")


class TestNotesClientAgainstApi:
    """Full loop: mutation → invalidation → refetch → fresh server state."""

    @pytest.mark.asyncio
    async def test_create_update_delete_flow(self, asgi_transport, client_settings):
        async with NotesClient.from_settings(
            settings=client_settings,
            runtime_config={"MIP_BACKEND_URL": "/api"},
            transport=asgi_transport,
        ) as client:
            assert client.api.base_url == "http://test/api"

            assert await client.notes.fetch() == []
            assert client.notes.state.is_success

            created = await client.create.mutate("buy milk")
            assert created["nrOfEdits"] == 0
            assert client.create.status is QueryStatus.SUCCESS
            await client.query_client.settle()
            assert [n["text"] for n in client.notes.data] == ["buy milk"]

            updated = await client.update.mutate(created["uuid"], "buy oat milk")
            assert updated["nrOfEdits"] == 1
            await client.query_client.settle()
            assert client.notes.data[0]["text"] == "buy oat milk"

            assert await client.delete.mutate(created["uuid"]) == {"ok": True}
            await client.query_client.settle()
            assert client.notes.data == []

    @pytest.mark.asyncio
    async def test_failed_mutation_sets_flag_and_skips_invalidation(
        self, asgi_transport, client_settings
    ):
        async with NotesClient.from_settings(
            settings=client_settings,
            runtime_config={"MIP_BACKEND_URL": "/api"},
            transport=asgi_transport,
        ) as client:
            await client.notes.fetch()

            result = await client.delete.mutate("does-not-exist")

            assert result is None
            assert client.delete.is_error
            assert not client.query_client.get_state(NOTES_QUERY_KEY).is_stale

    @pytest.mark.asyncio
    async def test_invalid_create_is_an_error(self, asgi_transport, client_settings):
        async with NotesClient.from_settings(
            settings=client_settings,
            runtime_config={"MIP_BACKEND_URL": "/api"},
            transport=asgi_transport,
        ) as client:
            assert await client.create.mutate("") is None
            assert client.create.is_error


class TestNotesClientWithMockTransport:

    @pytest.mark.asyncio
    async def test_list_failure_exposes_only_flag(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"error": "failed to list notes"})
        )
        client = NotesClient(NotesApi("http://backend/api", transport=transport))

        await client.notes.fetch()

        assert client.notes.is_error
        assert not client.notes.is_loading
        assert client.notes.data == []
        await client.close()

    @pytest.mark.asyncio
    async def test_requests_hit_expected_paths(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            if request.method == "GET":
                return httpx.Response(200, json=[])
            if request.method == "DELETE":
                return httpx.Response(200, json={"ok": True})
            return httpx.Response(200, json={"uuid": "u1", "text": "t"})

        api = NotesApi("http://backend/api", transport=httpx.MockTransport(handler))
        await api.list_notes()
        await api.create_note("t")
        await api.update_note("u1", "t2")
        await api.delete_note("u1")
        await api.close()

        assert seen == [
            ("GET", "/api/list"),
            ("POST", "/api/create"),
            ("PUT", "/api/update/u1"),
            ("DELETE", "/api/delete/u1"),
        ]

    @pytest.mark.asyncio
    async def test_update_omits_color_when_not_given(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return httpx.Response(200, json={})

        api = NotesApi("http://backend/api", transport=httpx.MockTransport(handler))
        await api.update_note("u1", "text only")
        await api.close()

        assert len(bodies) == 1
        assert b"text only" in bodies[0]
        assert b"color" not in bodies[0]

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_an_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json=[])
            return httpx.Response(200, text="<html>proxy page</html>")

        query_client = QueryClient()
        client = NotesClient(
            NotesApi("http://backend/api", transport=httpx.MockTransport(handler)),
            query_client=query_client,
        )
        await client.notes.fetch()

        assert await client.create.mutate("t") is None
        assert client.create.status is QueryStatus.ERROR
        assert not client.create.is_loading
        assert not query_client.get_state(NOTES_QUERY_KEY).is_stale
        await client.close()

    @pytest.mark.asyncio
    async def test_mutation_success_invalidates_notes_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json=[])
            return httpx.Response(201, json={"uuid": "u1", "text": "t", "nrOfEdits": 0})

        query_client = QueryClient()
        client = NotesClient(
            NotesApi("http://backend/api", transport=httpx.MockTransport(handler)),
            query_client=query_client,
        )
        await client.notes.fetch()
        seen = []
        client.notes.subscribe(lambda state: seen.append(state.status))

        await client.create.mutate("t")
        await query_client.settle()

        assert seen[0] is QueryStatus.SUCCESS  # stale mark
        assert QueryStatus.LOADING in seen
        assert seen[-1] is QueryStatus.SUCCESS
        await client.close()
