"""Wordfinder MCP server entrypoint using FastMCP.

Exposes the search session as tools so any MCP client can act as the
rendering layer. Run with:
  - poetry run wordfinder-mcp
  - or: python -m wordfinder.mcp.server (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

from typing import Optional

from fastmcp import FastMCP

from wordfinder.client.session import SearchClient
from wordfinder.config import Settings, load_settings
from wordfinder.connectors.search_backend import SearchBackendConnector
from wordfinder.exceptions import ConfigError
from wordfinder.logging import configure_logging, logger
from wordfinder.mcp.tools import register_search_tools


class AppState:
    """Application state shared by MCP tools."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.connector: Optional[SearchBackendConnector] = None
        self.client: Optional[SearchClient] = None

    def init_client(self) -> None:
        """Create the backend connector and open a fresh session."""
        cfg = self.settings.backend
        if not cfg.base_url or not cfg.base_url.strip():
            raise ConfigError("Backend base URL is empty. Set WORDFINDER_BACKEND__BASE_URL.")
        if self.client is not None:
            self.client.close()
        self.connector = SearchBackendConnector(
            base_url=cfg.base_url,
            timeout=cfg.timeout,
            verify_ssl=cfg.verify_ssl,
        )
        self.client = SearchClient(self.connector)
        logger.info("session_opened", base_url=self.connector.base_url)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


# Global state and server instance
_state: Optional[AppState] = None
mcp = FastMCP("Wordfinder MCP Server")


# ----- Tools -----

@mcp.tool
def health() -> str:
    """Simple health check tool."""
    return "ok"


# ----- Entrypoint -----

def main() -> None:
    """Initialize state and run the MCP server."""
    global _state
    settings = load_settings()
    configure_logging(settings.app.log_level)
    _state = AppState(settings)
    _state.init_client()
    register_search_tools(mcp, get_state=lambda: _state)
    # Choose transport based on configuration: stdio (default), http, or sse
    transport = settings.app.transport
    try:
        if transport in ("http", "sse"):
            mcp.run(transport=transport, host=settings.app.host, port=settings.app.port)
        else:
            mcp.run()
    finally:
        _state.close()


if __name__ == "__main__":  # pragma: no cover
    main()
