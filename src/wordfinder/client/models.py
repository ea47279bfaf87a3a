"""Data model for a word search session.

A session owns exactly one `ClientState`. The controllers mutate it; the
rendering layer reads it (usually through `derive_presentation`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class SearchMode(str, Enum):
    """Lookup mode. The value is the backend path segment for that mode."""

    EXACT = "word"
    FUZZY = "fuzzy"
    PREFIX = "prefix"

    @classmethod
    def parse(cls, value: Union[str, "SearchMode"]) -> "SearchMode":
        """Resolve a mode from a member, its name ("exact") or its path segment ("word")."""
        if isinstance(value, SearchMode):
            return value
        key = str(value or "").strip().lower()
        for mode in cls:
            if key in (mode.name.lower(), mode.value):
                return mode
        raise ValueError(f"Unknown search mode: '{value}'. Use exact, fuzzy or prefix.")


class AdminAction(str, Enum):
    """Mutating operations against the backend index."""

    REBUILD = "rebuild"
    DELETE_ENTRY = "delete_entry"
    DELETE_ALL = "delete_all"

    @classmethod
    def parse(cls, value: Union[str, "AdminAction"]) -> "AdminAction":
        if isinstance(value, AdminAction):
            return value
        key = str(value or "").strip().lower().replace("-", "_")
        for action in cls:
            if key in (action.name.lower(), action.value):
                return action
        raise ValueError(
            f"Unknown admin action: '{value}'. Use rebuild, delete_entry or delete_all."
        )


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Search input as typed by the user. Replaced, never mutated."""

    term: str = ""
    mode: SearchMode = SearchMode.EXACT

    @property
    def normalized_term(self) -> str:
        return self.term.strip()

    @property
    def is_empty(self) -> bool:
        return not self.normalized_term


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One entry of a search response.

    Attributes
    ----------
    word: str
        The matched word.
    metadata: str
        Free-form metadata string attached by the backend (e.g. part of speech).
    related_words: tuple[str, ...]
        Related words in backend order.
    """

    word: str
    metadata: str = ""
    related_words: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """Result of an admin action, shown in the modal slot until dismissed."""

    kind: OutcomeKind
    message: str

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


@dataclass(frozen=True, slots=True)
class PendingConfirmation:
    """A staged admin action waiting for the user to confirm or cancel."""

    action: AdminAction
    prompt_message: str
    target_term: Optional[str] = None


Modal = Union[PendingConfirmation, OperationOutcome]


@dataclass(slots=True)
class ClientState:
    """Mutable per-session state. Owned by a single `SearchClient`."""

    query: SearchQuery = field(default_factory=SearchQuery)
    results: List[SearchResult] = field(default_factory=list)
    is_busy: bool = False
    error_message: Optional[str] = None
    modal: Optional[Modal] = None
    # Set when the owning session is torn down; late responses are dropped
    closed: bool = False
