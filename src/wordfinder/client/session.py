"""SearchClient: the single owning handle for one search session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Union

from wordfinder.client.admin import AdminActionController
from wordfinder.client.models import AdminAction, ClientState, SearchMode
from wordfinder.client.presentation import PresentationState, derive_presentation
from wordfinder.client.query import QueryController
from wordfinder.logging import logger

if TYPE_CHECKING:
    from wordfinder.connectors.search_backend import SearchBackendConnector


class SearchClient:
    """Owns a `ClientState` and routes user input events to the controllers.

    Each instance is one session. State is never shared between instances;
    after `close()` every operation is a no-op and responses still in flight
    are dropped.
    """

    def __init__(self, connector: SearchBackendConnector) -> None:
        self._state = ClientState()
        self.queries = QueryController(self._state, connector)
        self.admin = AdminActionController(self._state, connector)

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state.closed

    def view(self) -> PresentationState:
        return derive_presentation(self._state)

    # ----- Query events -----

    def set_term(self, term: str) -> None:
        self.queries.set_term(term)

    def set_mode(self, mode: Union[str, SearchMode]) -> None:
        self.queries.set_mode(mode)

    async def search(
        self, term: str, mode: Union[str, SearchMode] = SearchMode.EXACT
    ) -> bool:
        return await self.queries.search(term, mode)

    async def submit(self) -> bool:
        return await self.queries.submit()

    async def handle_key(self, key: str) -> bool:
        return await self.queries.handle_key(key)

    # ----- Admin events -----

    def request_action(
        self, action: Union[str, AdminAction], term: Optional[str] = None
    ) -> bool:
        return self.admin.request_action(action, term)

    async def confirm(self) -> bool:
        return await self.admin.confirm()

    def cancel(self) -> bool:
        return self.admin.cancel()

    def dismiss(self) -> bool:
        return self.admin.dismiss()

    # ----- Lifecycle -----

    def close(self) -> None:
        if not self._state.closed:
            self._state.closed = True
            logger.info("session_closed", busy=self._state.is_busy)

    async def __aenter__(self) -> "SearchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()
