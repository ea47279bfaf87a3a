"""Custom exception hierarchy for Wordfinder.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
"""

from __future__ import annotations

from typing import Optional


class WordfinderError(Exception):
    """Base class for all Wordfinder exceptions."""


class ConfigError(WordfinderError):
    """Raised when configuration loading or validation fails."""


class BackendError(WordfinderError):
    """Raised when the search backend call fails (transport error or non-2xx status).

    Attributes
    ----------
    status_code: int | None
        HTTP status of the failed response, or None when no response arrived.
    detail: str | None
        Message text extracted from the backend's error body, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
