"""
Persona tools for the Character AI MCP server.
"""
from mcp_server.envelope import tool_envelope


def register_personas(mcp, dispatcher):
    """Register the persona tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def list_personas():
        """List all your personas."""
        return await dispatcher.call(
            "Your personas",
            lambda client: client.account.fetch_my_personas(),
        )

    @mcp.tool()
    @tool_envelope
    async def create_persona(name: str, description: str):
        """
        Create a new persona.

        Args:
            name: Persona name
            description: Personality traits, background, preferences
        """
        return await dispatcher.call(
            "Persona created",
            lambda client: client.account.create_persona(name, definition=description),
        )

    @mcp.tool()
    @tool_envelope
    async def update_persona(persona_id: str, name: str, description: str):
        """
        Update an existing persona.

        Args:
            persona_id: Persona ID to update
            name: New persona name
            description: New description
        """
        return await dispatcher.call(
            "Persona updated",
            lambda client: client.account.edit_persona(persona_id, name=name, definition=description),
        )

    @mcp.tool()
    @tool_envelope
    async def delete_persona(persona_id: str):
        """
        Delete a persona.

        Args:
            persona_id: Persona ID to delete
        """
        return await dispatcher.call(
            "Persona deleted",
            lambda client: client.account.delete_persona(persona_id),
        )

    @mcp.tool()
    @tool_envelope
    async def set_persona(character_id: str, persona_id: str):
        """
        Set which persona to use for a specific character.

        Args:
            character_id: Character ID
            persona_id: Persona ID to use
        """
        return await dispatcher.call(
            "Persona set",
            lambda client: client.account.set_persona(character_id, persona_id),
        )

    @mcp.tool()
    @tool_envelope
    async def set_default_persona(persona_id: str):
        """
        Set a persona as your default across all chats.

        Args:
            persona_id: Persona ID to set as default
        """
        return await dispatcher.call(
            "Default persona set",
            lambda client: client.account.set_default_persona(persona_id),
        )
