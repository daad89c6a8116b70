"""
MCP Tools for the Character AI bridge.

Tools are grouped by area, one module per area.
"""

from .search import register_search
from .characters import register_characters
from .chat import register_chat
from .history import register_history
from .images import register_images
from .personas import register_personas
from .account import register_account
from .voices import register_voices
from .scenes import register_scenes
from .style import register_style
from .group_chat import register_group_chat


def register_all_tools(mcp, dispatcher):
    """Register all Character AI tools with the MCP server."""
    # Search & discover
    register_search(mcp, dispatcher)
    # Characters
    register_characters(mcp, dispatcher)
    # Single chat (bound)
    register_chat(mcp, dispatcher)
    # History & management
    register_history(mcp, dispatcher)
    # Images
    register_images(mcp, dispatcher)
    # Personas & account
    register_personas(mcp, dispatcher)
    register_account(mcp, dispatcher)
    # Voices, scenes, style
    register_voices(mcp, dispatcher)
    register_scenes(mcp, dispatcher)
    register_style(mcp, dispatcher)
    # Group chat rooms
    register_group_chat(mcp, dispatcher)


__all__ = ["register_all_tools"]
