"""
Chat history & conversation management tools for the Character AI MCP server.
"""
from mcp_server.envelope import tool_envelope


def register_history(mcp, dispatcher):
    """Register the history and conversation tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def chat_history(character_id: str):
        """
        Get message history for the current conversation with a character.

        Args:
            character_id: Character ID to get history for
        """
        async def _history(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.fetch_all_messages(chat_id)

        return await dispatcher.call_bound("Chat history", character_id, _history)

    @mcp.tool()
    @tool_envelope
    async def conversation_list(character_id: str):
        """
        List all conversations with a character.

        Args:
            character_id: Character ID
        """
        return await dispatcher.call(
            "Conversation list",
            lambda client: client.chat.fetch_chats(character_id),
        )

    @mcp.tool()
    @tool_envelope
    async def recent_chats():
        """List recent chat activity."""
        return await dispatcher.call(
            "Recent chats",
            lambda client: client.chat.fetch_recent_chats(),
        )

    @mcp.tool()
    @tool_envelope
    async def pin_message(character_id: str, turn_id: str, pin: bool = True):
        """
        Pin or unpin a message in the current chat with a character.

        Args:
            character_id: Character ID
            turn_id: Turn ID of the message to pin
            pin: True to pin, false to unpin (default: true)
        """
        async def _pin(binding):
            chat_id = await binding.ensure_chat()
            if pin:
                return await binding.client.chat.pin_message(chat_id, turn_id)
            return await binding.client.chat.unpin_message(chat_id, turn_id)

        return await dispatcher.call_bound(
            f"Message {'pinned' if pin else 'unpinned'}", character_id, _pin
        )

    @mcp.tool()
    @tool_envelope
    async def list_pinned_messages(chat_id: str):
        """
        Get all pinned messages in a chat.

        Args:
            chat_id: Chat ID to get pinned messages from
        """
        return await dispatcher.call(
            "Pinned messages",
            lambda client: client.chat.fetch_all_messages(chat_id, pinned_only=True),
        )

    @mcp.tool()
    @tool_envelope
    async def archive_conversation(chat_id: str, archive: bool = True):
        """
        Archive or unarchive a conversation.

        Args:
            chat_id: Chat ID
            archive: True to archive, false to unarchive (default: true)
        """
        async def _archive(client):
            if archive:
                return await client.chat.archive_chat(chat_id)
            return await client.chat.unarchive_chat(chat_id)

        return await dispatcher.call(f"Conversation {'archived' if archive else 'unarchived'}", _archive)

    @mcp.tool()
    @tool_envelope
    async def rename_conversation(chat_id: str, new_name: str):
        """
        Rename a conversation.

        Args:
            chat_id: Chat ID
            new_name: New name for the conversation
        """
        return await dispatcher.call(
            "Conversation renamed",
            lambda client: client.chat.update_chat_name(chat_id, new_name),
        )

    @mcp.tool()
    @tool_envelope
    async def duplicate_conversation(chat_id: str, turn_id: str):
        """
        Duplicate a conversation up to a specific point.

        Args:
            chat_id: Chat ID to duplicate
            turn_id: Turn ID to duplicate up to
        """
        return await dispatcher.call(
            "Conversation duplicated",
            lambda client: client.chat.copy_chat(chat_id, turn_id),
        )
