"""Word search tools for FastMCP.

Each tool is one input event for the session held by `state.client`
and returns the resulting view of that session.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastmcp import FastMCP

from wordfinder.client.session import SearchClient


def register_search_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register search session tools on the given FastMCP instance.

    The `get_state` callable should return an object with attribute
    `client` holding an open `SearchClient`.
    """

    def _get_client() -> SearchClient:
        state = get_state()
        client = getattr(state, "client", None)
        if client is None or client.closed:
            raise RuntimeError(
                "Search client is not configured. Set WORDFINDER_BACKEND__BASE_URL and restart."
            )
        return client

    @mcp.tool
    async def search(term: str, mode: str = "exact") -> Dict[str, Any]:
        """Look up a word in the index.

        Parameters
        ----------
        term: str
            Word to look up. Blank terms are ignored.
        mode: str
            "exact" (default), "fuzzy" or "prefix".
        """
        client = _get_client()
        await client.search(term, mode)
        return client.view().to_dict()

    @mcp.tool
    def set_term(term: str) -> Dict[str, Any]:
        """Update the search box text without searching."""
        client = _get_client()
        client.set_term(term)
        return client.view().to_dict()

    @mcp.tool
    def set_mode(mode: str) -> Dict[str, Any]:
        """Select the search mode: "exact", "fuzzy" or "prefix"."""
        client = _get_client()
        client.set_mode(mode)
        return client.view().to_dict()

    @mcp.tool
    async def press_key(key: str) -> Dict[str, Any]:
        """Send a keystroke to the search box. "Enter" searches with the current text."""
        client = _get_client()
        await client.handle_key(key)
        return client.view().to_dict()

    @mcp.tool
    def request_action(action: str, term: Optional[str] = None) -> Dict[str, Any]:
        """Stage an admin action for confirmation (nothing is executed yet).

        Parameters
        ----------
        action: str
            "rebuild", "delete_entry" or "delete_all".
        term: str | None
            Entry to delete for "delete_entry". Defaults to the current search text.
        """
        client = _get_client()
        client.request_action(action, term)
        return client.view().to_dict()

    @mcp.tool
    async def confirm() -> Dict[str, Any]:
        """Execute the staged admin action and return its outcome."""
        client = _get_client()
        await client.confirm()
        return client.view().to_dict()

    @mcp.tool
    def cancel() -> Dict[str, Any]:
        """Cancel the staged admin action."""
        client = _get_client()
        client.cancel()
        return client.view().to_dict()

    @mcp.tool
    def dismiss() -> Dict[str, Any]:
        """Dismiss the outcome of the last admin action."""
        client = _get_client()
        client.dismiss()
        return client.view().to_dict()

    @mcp.tool
    def view() -> Dict[str, Any]:
        """Return the current session view without changing anything."""
        return _get_client().view().to_dict()
