"""
Voice tools for the Character AI MCP server.

Voice creation, lookup, assignment and the featured list use the platform
API directly; set_character_voice lives on the "plus" host.
"""
from typing import Literal, Optional

from cai_bridge.api import voice_create_body
from mcp_server.envelope import tool_envelope


def register_voices(mcp, dispatcher):
    """Register the voice tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def list_voices():
        """List voices you have created."""
        return await dispatcher.call(
            "Your voices",
            lambda client: client.account.fetch_my_voices(),
        )

    @mcp.tool()
    @tool_envelope
    async def get_voice_info(voice_id: str):
        """
        Get detailed info about a specific voice by ID.

        Args:
            voice_id: Voice ID to get info for
        """
        return await dispatcher.call_api(
            "Voice info",
            lambda api: api.get(f"/multimodal/api/v1/voices/{voice_id}/"),
        )

    @mcp.tool()
    @tool_envelope
    async def create_voice(
        name: str,
        voice_prompt: str,
        description: Optional[str] = None,
        visibility: Optional[Literal["public", "private"]] = None,
    ):
        """
        Create a new voice on Character AI using a text prompt.

        Args:
            name: Voice name
            voice_prompt: Text prompt describing the voice characteristics (e.g. 'deep male voice, warm and calm')
            description: Voice description
            visibility: Voice visibility (default: private)
        """
        body = voice_create_body(name, voice_prompt, description=description, visibility=visibility)
        return await dispatcher.call_api(
            "Voice created!",
            lambda api: api.post("/multimodal/api/v1/voices/", body),
            error_prefix="Error creating voice",
        )

    @mcp.tool()
    @tool_envelope
    async def set_character_voice(character_id: str, voice_id: str):
        """
        Set which voice a character uses.

        Args:
            character_id: Character ID to set voice for
            voice_id: Voice ID to assign to the character
        """
        body = {"character_external_id": character_id, "voice_id": voice_id}
        return await dispatcher.call_api(
            "Voice set!",
            lambda api: api.post("/chat/character/voice_override/update/", body, host="plus"),
            error_prefix="Error setting voice",
        )

    @mcp.tool()
    @tool_envelope
    async def featured_voices():
        """Get featured/popular voices."""
        return await dispatcher.call_api(
            "Featured voices",
            lambda api: api.get("/multimodal/api/v1/voices/featured/"),
        )
