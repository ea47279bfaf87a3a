from typing import Any

import httpx
import pytest
from structlog.testing import capture_logs

from wordfinder.client.admin import ACTION_FAILED_MESSAGE
from wordfinder.client.models import (
    AdminAction,
    OperationOutcome,
    OutcomeKind,
    SearchMode,
    SearchResult,
)
from wordfinder.client.query import SEARCH_FAILED_MESSAGE
from wordfinder.client.session import SearchClient
from wordfinder.connectors.search_backend import (
    DEFAULT_SUCCESS_MESSAGE,
    SearchBackendConnector,
    encode_term,
)
from wordfinder.exceptions import BackendError

BASE_URL = "https://words.example.com/api"

# ---------- Helpers ----------


def make_mock_client(responder: Any) -> httpx.AsyncClient:
    transport = httpx.MockTransport(responder)
    return httpx.AsyncClient(transport=transport, base_url=BASE_URL)


def patch_client_with_responder(conn: SearchBackendConnector, responder: Any) -> None:
    # Patch the private _client factory to return our AsyncClient with MockTransport
    def _client() -> httpx.AsyncClient:  # type: ignore[override]
        return make_mock_client(responder)

    setattr(conn, "_client", _client)


def make_connector(responder: Any) -> SearchBackendConnector:
    conn = SearchBackendConnector(base_url=BASE_URL + "/")
    patch_client_with_responder(conn, responder)
    return conn


# ---------- search ----------


@pytest.mark.asyncio
async def test_search_returns_results_in_backend_order() -> None:
    payload = [
        {"word": "hello", "metadata": "noun", "relatedWords": ["hi", "greeting"]},
        {"word": "help", "metadata": "verb", "relatedWords": []},
    ]

    def responder(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/api/search/prefix/hel":
            return httpx.Response(200, json=payload)
        return httpx.Response(404, json={"error": "not found"})

    conn = make_connector(responder)
    results = await conn.search(SearchMode.PREFIX, "hel")
    assert results == [
        SearchResult(word="hello", metadata="noun", related_words=("hi", "greeting")),
        SearchResult(word="help", metadata="verb", related_words=()),
    ]


@pytest.mark.asyncio
async def test_search_uses_mode_path_segments() -> None:
    seen = []

    def responder(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json=[])

    conn = make_connector(responder)
    for mode in (SearchMode.EXACT, SearchMode.FUZZY, SearchMode.PREFIX):
        assert await conn.search(mode, "zzz") == []
    assert seen == [
        "/api/search/word/zzz",
        "/api/search/fuzzy/zzz",
        "/api/search/prefix/zzz",
    ]


@pytest.mark.asyncio
async def test_search_percent_encodes_term() -> None:
    seen = []

    def responder(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(200, json=[])

    conn = make_connector(responder)
    await conn.search(SearchMode.FUZZY, "a b/c?")
    assert seen == [b"/api/search/fuzzy/a%20b%2Fc%3F"]


def test_encode_term_matches_uri_component_rules() -> None:
    assert encode_term("it's (ok)!") == "it's%20(ok)!"
    assert encode_term("café") == "caf%C3%A9"
    assert encode_term("a&b=c#d") == "a%26b%3Dc%23d"


@pytest.mark.asyncio
async def test_search_non_2xx_raises_backend_error() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "index offline"})

    conn = make_connector(responder)
    with pytest.raises(BackendError) as info:
        await conn.search(SearchMode.EXACT, "hello")
    assert info.value.status_code == 500
    assert info.value.detail == "index offline"


@pytest.mark.asyncio
async def test_search_transport_error_raises_backend_error() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    conn = make_connector(responder)
    with pytest.raises(BackendError) as info:
        await conn.search(SearchMode.EXACT, "hello")
    assert info.value.status_code is None
    assert info.value.detail is None


@pytest.mark.asyncio
async def test_search_rejects_non_list_payload() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"word": "hello"})

    conn = make_connector(responder)
    with pytest.raises(BackendError):
        await conn.search(SearchMode.EXACT, "hello")


@pytest.mark.asyncio
async def test_search_fills_missing_fields() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"word": "solo"}])

    conn = make_connector(responder)
    results = await conn.search(SearchMode.EXACT, "solo")
    assert results == [SearchResult(word="solo", metadata="", related_words=())]


# ---------- mutations ----------


@pytest.mark.asyncio
async def test_rebuild_index_posts_and_returns_plain_text() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path == "/api/search/rebuild-index":
            assert request.content == b""
            return httpx.Response(200, text="Index rebuilt")
        return httpx.Response(404)

    conn = make_connector(responder)
    assert await conn.rebuild_index() == "Index rebuilt"


@pytest.mark.asyncio
async def test_delete_entry_encodes_term_and_reads_json_message() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE" and request.url.raw_path == b"/api/search/delete/new%20york":
            return httpx.Response(200, json={"message": "Deleted"})
        return httpx.Response(404)

    conn = make_connector(responder)
    assert await conn.delete_entry("new york") == "Deleted"


@pytest.mark.asyncio
async def test_delete_index_accepts_json_string_and_empty_body() -> None:
    bodies = [httpx.Response(200, json="All entries removed"), httpx.Response(204)]

    def responder(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/api/search/delete-index"
        return bodies.pop(0)

    conn = make_connector(responder)
    assert await conn.delete_index() == "All entries removed"
    assert await conn.delete_index() == DEFAULT_SUCCESS_MESSAGE


@pytest.mark.asyncio
async def test_mutation_failure_carries_backend_message() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="Word not found")

    conn = make_connector(responder)
    with pytest.raises(BackendError) as info:
        await conn.delete_entry("ghost")
    assert info.value.status_code == 404
    assert info.value.detail == "Word not found"


@pytest.mark.asyncio
async def test_related_words_string_is_kept_whole() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"word": "hello", "relatedWords": "hey"}])

    conn = make_connector(responder)
    results = await conn.search(SearchMode.EXACT, "hello")
    assert results == [SearchResult(word="hello", metadata="", related_words=("hey",))]


@pytest.mark.asyncio
async def test_related_words_of_unexpected_type_raise_backend_error() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"word": "hello", "relatedWords": {"a": 1}}])

    conn = make_connector(responder)
    with pytest.raises(BackendError):
        await conn.search(SearchMode.EXACT, "hello")


# ---------- terms that cannot be encoded ----------


@pytest.mark.asyncio
async def test_unencodable_term_raises_backend_error_without_request() -> None:
    calls = []

    def responder(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    conn = make_connector(responder)
    with pytest.raises(BackendError) as info:
        await conn.search(SearchMode.EXACT, "ab\ud800")
    assert info.value.status_code is None
    assert info.value.detail is None
    with pytest.raises(BackendError):
        await conn.delete_entry("x\ud800")
    assert calls == []


@pytest.mark.asyncio
async def test_unencodable_search_term_sets_error_message() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    session = SearchClient(make_connector(responder))
    session.state.results = [SearchResult(word="hello")]
    with capture_logs() as logs:
        assert await session.search("ab\ud800") is False

    assert session.state.error_message == SEARCH_FAILED_MESSAGE
    assert session.state.results == [SearchResult(word="hello")]
    assert session.state.is_busy is False
    assert [e["event"] for e in logs] == ["search_failed"]


@pytest.mark.asyncio
async def test_unencodable_delete_term_yields_failure_outcome() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="Deleted")

    session = SearchClient(make_connector(responder))
    assert session.request_action(AdminAction.DELETE_ENTRY, "x\ud800") is True
    with capture_logs() as logs:
        assert await session.confirm() is True

    assert session.state.modal == OperationOutcome(
        kind=OutcomeKind.FAILURE, message=ACTION_FAILED_MESSAGE
    )
    assert session.state.is_busy is False
    assert "admin_action_failed" in [e["event"] for e in logs]
