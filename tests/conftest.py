from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Tuple

import pytest

from wordfinder.client.models import SearchMode, SearchResult
from wordfinder.client.session import SearchClient
from wordfinder.exceptions import BackendError


class FakeConnector:
    """In-memory stand-in for SearchBackendConnector.

    Set `gate` to an `asyncio.Event` to hold calls in flight until it is set;
    `started` fires as soon as a call is dispatched.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.search_results: List[SearchResult] = []
        self.search_error: Optional[BackendError] = None
        self.mutation_message = "Done"
        self.mutation_error: Optional[BackendError] = None
        self.gate: Optional[asyncio.Event] = None
        self.started = asyncio.Event()

    async def _dispatch(self, *call: Any) -> None:
        self.calls.append(call)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()

    async def search(self, mode: SearchMode, term: str) -> List[SearchResult]:
        await self._dispatch("search", mode, term)
        if self.search_error is not None:
            raise self.search_error
        return list(self.search_results)

    async def _mutate(self, *call: Any) -> str:
        await self._dispatch(*call)
        if self.mutation_error is not None:
            raise self.mutation_error
        return self.mutation_message

    async def rebuild_index(self) -> str:
        return await self._mutate("rebuild_index")

    async def delete_entry(self, term: str) -> str:
        return await self._mutate("delete_entry", term)

    async def delete_index(self) -> str:
        return await self._mutate("delete_index")


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def client(connector: FakeConnector) -> SearchClient:
    return SearchClient(connector)  # type: ignore[arg-type]
