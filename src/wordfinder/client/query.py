"""Query controller: turns search input into backend lookups.

Owns the current search text and mode (`state.query`) and folds lookup
responses into `state.results` / `state.error_message`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Union

from wordfinder.client.models import ClientState, SearchMode, SearchQuery
from wordfinder.exceptions import BackendError
from wordfinder.logging import logger

if TYPE_CHECKING:
    from wordfinder.connectors.search_backend import SearchBackendConnector

SEARCH_FAILED_MESSAGE = "Failed to fetch results. Please try again."
SUBMIT_KEY = "Enter"


class QueryController:
    def __init__(self, state: ClientState, connector: SearchBackendConnector) -> None:
        self._state = state
        self._connector = connector

    def set_term(self, term: str) -> None:
        """Update the typed search text. No network effect."""
        if self._state.closed:
            return
        self._state.query = replace(self._state.query, term=term or "")

    def set_mode(self, mode: Union[str, SearchMode]) -> None:
        if self._state.closed:
            return
        self._state.query = replace(self._state.query, mode=SearchMode.parse(mode))

    async def search(self, term: str, mode: Union[str, SearchMode] = SearchMode.EXACT) -> bool:
        """Run a lookup and fold the response into the session state.

        Returns True when results were replaced, False when the call was
        skipped (blank term, busy or closed session) or failed.
        """
        state = self._state
        if state.closed:
            return False
        term = term or ""
        if not term.strip():
            return False
        query = SearchQuery(term=term, mode=SearchMode.parse(mode))
        if state.is_busy:
            logger.info("search_rejected_busy", term=query.normalized_term, mode=query.mode.name)
            return False

        state.query = query
        state.is_busy = True
        state.error_message = None
        try:
            results = await self._connector.search(query.mode, query.normalized_term)
        except BackendError as exc:
            if state.closed:
                logger.info("stale_response_discarded", operation="search")
                return False
            logger.warning(
                "search_failed",
                term=query.normalized_term,
                mode=query.mode.name,
                status_code=exc.status_code,
                detail=exc.detail,
                error=str(exc),
            )
            state.error_message = SEARCH_FAILED_MESSAGE
            return False
        finally:
            if not state.closed:
                state.is_busy = False

        if state.closed:
            logger.info("stale_response_discarded", operation="search")
            return False
        state.results = list(results)
        return True

    async def submit(self) -> bool:
        """Search with the current text and mode."""
        query = self._state.query
        return await self.search(query.term, query.mode)

    async def handle_key(self, key: str) -> bool:
        """Handle a keystroke from the search box; only the submit key searches."""
        if key != SUBMIT_KEY:
            return False
        return await self.submit()
