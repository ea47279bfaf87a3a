"""Connector for the remote word/index search service.

Uses the service's REST endpoints via httpx:

  GET    /search/{word|fuzzy|prefix}/{term}
  POST   /search/rebuild-index
  DELETE /search/delete/{term}
  DELETE /search/delete-index

All paths are relative to the configured base URL.
"""

from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from wordfinder.client.models import SearchMode, SearchResult
from wordfinder.exceptions import BackendError

DEFAULT_SUCCESS_MESSAGE = "Operation completed."

# Same character set JavaScript's encodeURIComponent leaves alone
_TERM_SAFE_CHARS = "-_.!~*'()"

_MESSAGE_KEYS = ("message", "detail", "error", "status")


def encode_term(term: str) -> str:
    """Percent-encode a term for use as a single path segment."""
    return quote(term, safe=_TERM_SAFE_CHARS)


def extract_message(resp: httpx.Response) -> Optional[str]:
    """Return the human-readable message carried by a JSON or plain-text body."""
    try:
        data: Any = resp.json()
    except ValueError:
        data = None
    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, dict):
        for key in _MESSAGE_KEYS:
            val = data.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
        return None
    text = (resp.text or "").strip()
    return text or None


def _to_result(item: Any) -> SearchResult:
    if not isinstance(item, dict):
        raise BackendError(f"Unexpected search result item: {item!r}")
    related = item.get("relatedWords")
    if related is None:
        related = item.get("related_words")
    if isinstance(related, str):
        related = [related]
    elif related is not None and not isinstance(related, list):
        raise BackendError(f"Unexpected relatedWords value: {related!r}")
    return SearchResult(
        word=str(item.get("word") or ""),
        metadata=str(item.get("metadata") or ""),
        related_words=tuple(str(w) for w in (related or []) if w is not None),
    )


class SearchBackendConnector:
    def __init__(
        self,
        *,
        base_url: str,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            verify=self.verify_ssl,
            headers={"Accept": "application/json, text/plain;q=0.9"},
        )

    async def _request(
        self, method: str, path: str, *, term: Optional[str] = None
    ) -> httpx.Response:
        """Send one request; `term`, when given, is encoded as the last path segment."""
        try:
            if term is not None:
                path = f"{path}/{encode_term(term)}"
            async with self._client() as client:
                resp = await client.request(method, path)
                resp.raise_for_status()
                return resp
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise BackendError(
                f"{method} {path} failed with HTTP {status}",
                status_code=status,
                detail=extract_message(exc.response),
            ) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"{method} {path} failed: {exc!r}") from exc
        except (UnicodeEncodeError, httpx.InvalidURL) as exc:
            raise BackendError(f"{method} {path}: term cannot be sent: {exc!r}") from exc

    async def search(self, mode: SearchMode, term: str) -> List[SearchResult]:
        """Look up `term` with the endpoint for `mode`; results keep backend order."""
        resp = await self._request("GET", f"/search/{mode.value}", term=term)
        try:
            data = resp.json()
        except ValueError as exc:
            raise BackendError("Search response is not valid JSON") from exc
        if not isinstance(data, list):
            raise BackendError(f"Search response is not a list: {type(data).__name__}")
        return [_to_result(item) for item in data]

    async def _mutate(self, method: str, path: str, *, term: Optional[str] = None) -> str:
        resp = await self._request(method, path, term=term)
        return extract_message(resp) or DEFAULT_SUCCESS_MESSAGE

    async def rebuild_index(self) -> str:
        return await self._mutate("POST", "/search/rebuild-index")

    async def delete_entry(self, term: str) -> str:
        return await self._mutate("DELETE", "/search/delete", term=term)

    async def delete_index(self) -> str:
        return await self._mutate("DELETE", "/search/delete-index")
