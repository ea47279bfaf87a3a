"""Client-side search session: controllers, data model and view derivation."""

from .admin import ACTION_FAILED_MESSAGE, AdminActionController
from .models import (
    AdminAction,
    ClientState,
    OperationOutcome,
    OutcomeKind,
    PendingConfirmation,
    SearchMode,
    SearchQuery,
    SearchResult,
)
from .presentation import PresentationState, derive_presentation, is_empty_results
from .query import SEARCH_FAILED_MESSAGE, SUBMIT_KEY, QueryController
from .session import SearchClient

__all__ = [
    "ACTION_FAILED_MESSAGE",
    "SEARCH_FAILED_MESSAGE",
    "SUBMIT_KEY",
    "AdminAction",
    "AdminActionController",
    "ClientState",
    "OperationOutcome",
    "OutcomeKind",
    "PendingConfirmation",
    "PresentationState",
    "QueryController",
    "SearchClient",
    "SearchMode",
    "SearchQuery",
    "SearchResult",
    "derive_presentation",
    "is_empty_results",
]
