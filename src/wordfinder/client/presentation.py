"""Read-only view model derived from a `ClientState`.

`derive_presentation` is pure and cheap; call it after every state change
instead of keeping a derived copy around.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from wordfinder.client.models import (
    ClientState,
    Modal,
    OperationOutcome,
    PendingConfirmation,
    SearchResult,
)


@dataclass(frozen=True, slots=True)
class PresentationState:
    term: str
    mode: str
    is_loading: bool
    error_message: Optional[str]
    results: Tuple[SearchResult, ...]
    modal: Optional[Modal]
    show_empty_results: bool

    @property
    def empty_results_message(self) -> Optional[str]:
        if not self.show_empty_results:
            return None
        return f'No results found for "{self.term}"'

    @property
    def search_enabled(self) -> bool:
        return not self.is_loading

    @property
    def search_button_label(self) -> str:
        return "Searching..." if self.is_loading else "Search"

    @property
    def modal_kind(self) -> Optional[str]:
        if isinstance(self.modal, PendingConfirmation):
            return "confirm"
        if isinstance(self.modal, OperationOutcome):
            return self.modal.kind.value
        return None

    @property
    def modal_message(self) -> Optional[str]:
        if isinstance(self.modal, PendingConfirmation):
            return self.modal.prompt_message
        if isinstance(self.modal, OperationOutcome):
            return self.modal.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        modal: Optional[Dict[str, Any]] = None
        if self.modal is not None:
            modal = {"kind": self.modal_kind, "message": self.modal_message}
            if isinstance(self.modal, PendingConfirmation):
                modal["action"] = self.modal.action.value
                modal["target_term"] = self.modal.target_term
        return {
            "term": self.term,
            "mode": self.mode,
            "is_loading": self.is_loading,
            "error_message": self.error_message,
            "results": [
                {
                    "word": r.word,
                    "metadata": r.metadata,
                    "relatedWords": list(r.related_words),
                }
                for r in self.results
            ],
            "empty_results_message": self.empty_results_message,
            "search_button_label": self.search_button_label,
            "modal": modal,
        }


def is_empty_results(state: ClientState) -> bool:
    """True when an idle, error-free session has a term but no results to show."""
    return (
        not state.is_busy
        and len(state.results) == 0
        and not state.query.is_empty
        and state.error_message is None
    )


def derive_presentation(state: ClientState) -> PresentationState:
    return PresentationState(
        term=state.query.term,
        mode=state.query.mode.name.lower(),
        is_loading=state.is_busy,
        error_message=state.error_message,
        results=tuple(state.results),
        modal=state.modal,
        show_empty_results=is_empty_results(state),
    )
