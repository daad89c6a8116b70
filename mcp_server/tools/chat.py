"""
Single-chat tools for the Character AI MCP server.

Every tool here runs bound to its character so the chat it acts on is
the character's current chat.
"""
from mcp_server.envelope import tool_envelope


def register_chat(mcp, dispatcher):
    """Register the single-chat tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def send_message(character_id: str, message: str):
        """
        Send a message to a character and get their response.

        Each call adds a new turn to the conversation; it is not idempotent.

        Args:
            character_id: Character ID to chat with
            message: Message to send
        """
        async def _send(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.send_message(character_id, chat_id, message)

        return await dispatcher.call_bound("Character response", character_id, _send)

    @mcp.tool()
    @tool_envelope
    async def regenerate_response(character_id: str, turn_id: str):
        """
        Regenerate/swipe to get an alternative character response.

        Each call produces a new candidate for the turn.

        Args:
            character_id: Character ID
            turn_id: Turn ID of the message to regenerate
        """
        async def _regenerate(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.another_response(character_id, chat_id, turn_id)

        return await dispatcher.call_bound("Alternative response", character_id, _regenerate)

    @mcp.tool()
    @tool_envelope
    async def edit_message(character_id: str, candidate_id: str, turn_id: str, new_message: str):
        """
        Edit a message in a character chat.

        Args:
            character_id: Character ID
            candidate_id: Candidate ID of the message
            turn_id: Turn ID of the message
            new_message: New message content
        """
        async def _edit(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.edit_message(chat_id, turn_id, candidate_id, new_message)

        return await dispatcher.call_bound("Message edited", character_id, _edit)

    @mcp.tool()
    @tool_envelope
    async def delete_message(character_id: str, turn_id: str):
        """
        Delete a message from a character chat.

        Args:
            character_id: Character ID
            turn_id: Turn ID of the message to delete
        """
        async def _delete(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.delete_message(chat_id, turn_id)

        return await dispatcher.call_bound("Message deleted", character_id, _delete)

    @mcp.tool()
    @tool_envelope
    async def new_conversation(character_id: str, with_greeting: bool = True):
        """
        Start a new conversation with a character (the current one stays in history).

        Args:
            character_id: Character ID to start a new conversation with
            with_greeting: Include greeting message (default: true)
        """
        async def _new(binding):
            chat, greeting = await binding.start_new_chat(greeting=with_greeting)
            return {"chat": chat, "greeting": greeting}

        return await dispatcher.call_bound("New conversation created", character_id, _new)
