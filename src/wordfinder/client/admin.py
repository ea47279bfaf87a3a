"""Admin action controller with an explicit confirmation step.

Destructive actions are staged as a `PendingConfirmation` in the modal
slot. Only `confirm()` executes them; the result replaces the
confirmation with an `OperationOutcome`. `cancel()` / `dismiss()` empty
the slot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from wordfinder.client.models import (
    AdminAction,
    ClientState,
    OperationOutcome,
    OutcomeKind,
    PendingConfirmation,
)
from wordfinder.exceptions import BackendError
from wordfinder.logging import logger

if TYPE_CHECKING:
    from wordfinder.connectors.search_backend import SearchBackendConnector

ACTION_FAILED_MESSAGE = "Operation failed. Please try again."


def build_prompt(action: AdminAction, target_term: Optional[str] = None) -> str:
    if action is AdminAction.REBUILD:
        return "Rebuild the search index? This may take a while."
    if action is AdminAction.DELETE_ENTRY:
        return f'Delete "{target_term}" from the index?'
    return "Delete the entire index? This cannot be undone."


class AdminActionController:
    def __init__(self, state: ClientState, connector: SearchBackendConnector) -> None:
        self._state = state
        self._connector = connector

    def request_action(
        self, action: Union[str, AdminAction], term: Optional[str] = None
    ) -> bool:
        """Stage a confirmation for `action`. Never touches the network.

        For DELETE_ENTRY the target is `term` when given, else the current
        search text. A blank target leaves the state unchanged.
        """
        state = self._state
        if state.closed:
            return False
        action = AdminAction.parse(action)
        target: Optional[str] = None
        if action is AdminAction.DELETE_ENTRY:
            target = (state.query.term if term is None else term).strip()
            if not target:
                return False
        state.modal = PendingConfirmation(
            action=action,
            prompt_message=build_prompt(action, target),
            target_term=target,
        )
        return True

    async def confirm(self) -> bool:
        """Execute the staged action and show its outcome.

        Returns False without touching the state when nothing is staged, and
        without dispatching (the confirmation stays staged) while busy.
        """
        state = self._state
        pending = state.modal
        if state.closed or not isinstance(pending, PendingConfirmation):
            return False
        if state.is_busy:
            logger.info("confirm_rejected_busy", action=pending.action.value)
            return False

        state.modal = None
        state.is_busy = True
        try:
            message = await self._execute(pending)
        except BackendError as exc:
            logger.warning(
                "admin_action_failed",
                action=pending.action.value,
                target=pending.target_term,
                status_code=exc.status_code,
                detail=exc.detail,
                error=str(exc),
            )
            outcome = OperationOutcome(
                kind=OutcomeKind.FAILURE, message=exc.detail or ACTION_FAILED_MESSAGE
            )
        else:
            outcome = OperationOutcome(kind=OutcomeKind.SUCCESS, message=message)
        finally:
            if not state.closed:
                state.is_busy = False

        if state.closed:
            logger.info("stale_response_discarded", operation=pending.action.value)
            return False
        logger.info(
            "admin_action_completed",
            action=pending.action.value,
            ok=outcome.ok,
            message=outcome.message,
        )
        if state.modal is not None:
            # A confirmation staged while the call was in flight keeps the slot
            return True
        state.modal = outcome
        return True

    async def _execute(self, pending: PendingConfirmation) -> str:
        if pending.action is AdminAction.REBUILD:
            return await self._connector.rebuild_index()
        if pending.action is AdminAction.DELETE_ENTRY:
            return await self._connector.delete_entry(pending.target_term or "")
        return await self._connector.delete_index()

    def cancel(self) -> bool:
        """Empty the modal slot, whatever it holds."""
        if self._state.modal is None:
            return False
        self._state.modal = None
        return True

    def dismiss(self) -> bool:
        return self.cancel()
