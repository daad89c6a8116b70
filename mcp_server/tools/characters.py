"""
Character tools for the Character AI MCP server.

character_info_detailed runs bound to the character; create, update and
like go straight to the platform API because the client library has no
call for them.
"""
from typing import Literal, Optional

from cai_bridge.api import character_create_body, character_update_body, vote_body
from mcp_server.envelope import tool_envelope

Visibility = Literal["PUBLIC", "UNLISTED", "PRIVATE"]

CHARACTER_URL = "https://character.ai/chat/{character_id}"


def register_characters(mcp, dispatcher):
    """Register the character tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def character_info(character_id: str):
        """
        Get information about a character.

        Args:
            character_id: The character ID
        """
        return await dispatcher.call(
            "Character info",
            lambda client: client.character.fetch_character_info(character_id),
        )

    @mcp.tool()
    @tool_envelope
    async def character_info_detailed(character_id: str):
        """
        Get FULL detailed character info including definition (only works if
        definition is public), plus the chat currently in use with them.

        Args:
            character_id: The character ID
        """
        async def _detailed(binding):
            info = await binding.client.character.fetch_character_info(character_id)
            chat_id = await binding.ensure_chat()
            return {"character": info, "chat_id": chat_id}

        return await dispatcher.call_bound("Detailed character info", character_id, _detailed)

    @mcp.tool()
    @tool_envelope
    async def character_voice(character_id: str):
        """
        Get the current voice info for a character.

        Args:
            character_id: The character ID
        """
        async def _voice(client):
            info = await client.character.fetch_character_info(character_id)
            voice_id = getattr(info, "default_voice_id", None)
            if not voice_id:
                return {"character_id": character_id, "voice": None}
            return {"character_id": character_id, "voice": await client.utils.fetch_voice(voice_id)}

        return await dispatcher.call("Voice info", _voice)

    @mcp.tool()
    @tool_envelope
    async def create_character(
        name: str,
        greeting: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        definition: Optional[str] = None,
        visibility: Optional[Visibility] = None,
    ):
        """
        Create a new AI character on Character AI.

        Args:
            name: Character name (required)
            greeting: First message the character sends when chat starts
            title: Short tagline for the character card
            description: Leave empty unless specified. Detailed personality, backstory, traits (max 500 chars)
            definition: Advanced behavior definition with example dialogues. Use {{char}} and {{user}} variables
            visibility: Character visibility (default: PRIVATE)
        """
        body = character_create_body(
            name=name,
            greeting=greeting,
            title=title,
            description=description,
            definition=definition,
            visibility=visibility,
        )
        return await dispatcher.call_api(
            "Character created!",
            lambda api: api.post("/character/v1/create_character", body),
            error_prefix="Error creating character",
        )

    @mcp.tool()
    @tool_envelope
    async def update_character(
        character_id: str,
        name: Optional[str] = None,
        greeting: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        definition: Optional[str] = None,
        visibility: Optional[Visibility] = None,
    ):
        """
        Update an existing character's attributes. Only supplied fields change.

        Args:
            character_id: External ID of the character to update
            name: New name
            greeting: New greeting message
            title: New tagline
            description: New description
            definition: New definition
            visibility: New visibility
        """
        body = character_update_body(
            character_id,
            name=name,
            greeting=greeting,
            title=title,
            description=description,
            definition=definition,
            visibility=visibility,
        )
        return await dispatcher.call_api(
            "Character updated!",
            lambda api: api.post("/character/v1/update_character", body),
            error_prefix="Error updating character",
        )

    @mcp.tool()
    @tool_envelope
    async def like_character(character_id: str, like: bool = True):
        """
        Like/upvote a character (or unlike).

        Args:
            character_id: Character ID to like
            like: True to like, false to unlike (default: true)
        """
        body = vote_body(character_id, like)
        return await dispatcher.call_api(
            f"Character {'liked' if like else 'unliked'}!",
            lambda api: api.post("/chat/character/vote/", body),
        )

    @mcp.tool()
    @tool_envelope
    async def get_character_link(character_id: str):
        """
        Get a shareable link for a character.

        Args:
            character_id: Character ID to get link for
        """
        return dispatcher.text(f"Shareable link:\n\n{CHARACTER_URL.format(character_id=character_id)}")
