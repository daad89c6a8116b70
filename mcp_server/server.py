"""
MCP Server for the Character AI bridge.

Exposes Character AI as MCP tools over stdio.

Run with: character-ai-mcp
Or: python -m mcp_server.server
"""
import logging
import sys
from typing import Optional

from mcp.server import FastMCP

from cai_bridge.config import BridgeConfig, load_config, resolve_token
from cai_bridge.dispatch import Dispatcher
from cai_bridge.exceptions import ConfigurationError
from cai_bridge.session import SessionManager
from mcp_server.tools import register_all_tools

SERVER_NAME = "character-ai"

logger = logging.getLogger(__name__)


def create_server(config: BridgeConfig, session_manager: Optional[SessionManager] = None):
    """
    Build the FastMCP server with every tool registered.

    Returns:
        Tuple of (server, dispatcher)
    """
    if session_manager is None:
        session_manager = SessionManager(lambda: resolve_token(config))
    dispatcher = Dispatcher(session_manager, config)

    server = FastMCP(SERVER_NAME)
    register_all_tools(server, dispatcher)
    return server, dispatcher


def _configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _report_missing_token(error: ConfigurationError) -> None:
    """Print setup instructions for a missing credential."""
    print("=" * 60, file=sys.stderr)
    print("CHARACTER AI TOKEN REQUIRED", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print("", file=sys.stderr)
    print(f"ERROR: {error}", file=sys.stderr)
    print("", file=sys.stderr)
    print("Easy setup: run 'cai-get-token' to save your token.", file=sys.stderr)
    print("", file=sys.stderr)
    print("Or set the CAI_TOKEN environment variable in your MCP config.", file=sys.stderr)
    print("=" * 60, file=sys.stderr)


async def main_async(config: BridgeConfig):
    """Run the MCP server (async)."""
    server, dispatcher = create_server(config)
    try:
        await server.run_stdio_async()
    finally:
        await dispatcher.sessions.close()


def main():
    """Entry point for script installation."""
    import asyncio

    try:
        config = load_config()
        # Fail fast: never serve tools without a credential
        resolve_token(config)
    except ConfigurationError as e:
        _report_missing_token(e)
        sys.exit(1)

    _configure_logging(config.log_level)
    logger.info("Starting %s MCP server", SERVER_NAME)
    asyncio.run(main_async(config))


if __name__ == "__main__":
    main()
