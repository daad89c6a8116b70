"""
Group chat tools for the Character AI MCP server.

Rooms are managed through the platform API. Sending a message binds the
session to the room, so the message and the reply share one bound sequence.
"""
import asyncio
from typing import Any, List, Optional

from cai_bridge.api import room_character_patch, room_create_body
from cai_bridge.exceptions import BindingError
from mcp_server.envelope import tool_envelope


def _room_character_ids(room: Any) -> List[str]:
    """Character ids of a room payload, in room order."""
    if isinstance(room, dict) and isinstance(room.get("room"), dict):
        room = room["room"]
    characters = room.get("characters") if isinstance(room, dict) else None
    ids = []
    for character in characters or []:
        if isinstance(character, dict):
            character_id = character.get("id") or character.get("external_id")
        else:
            character_id = character
        if character_id:
            ids.append(character_id)
    return ids


def register_group_chat(mcp, dispatcher):
    """Register the group chat tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def group_chat_list():
        """List all your group chats."""
        return await dispatcher.call_api(
            "Group chats",
            lambda api: api.get("/murooms/", params={"include_turns": "false"}),
        )

    @mcp.tool()
    @tool_envelope
    async def group_chat_create(title: str, character_id: str):
        """
        Create a new group chat room with a character.

        Args:
            title: Name/title for the group chat room
            character_id: Character ID to add to the room
        """
        body = room_create_body(title, character_id)
        return await dispatcher.call_api(
            "Group chat created",
            lambda api: api.post("/muroom/create", body),
            error_prefix="Error creating group chat",
        )

    @mcp.tool()
    @tool_envelope
    async def group_chat_send(room_id: str, message: str, character_id: Optional[str] = None):
        """
        Send a message in a group chat and get a character's reply.

        Args:
            room_id: Room ID of the group chat
            message: Message to send
            character_id: Character in the room who should reply (default: the room's first character)
        """
        async def _send(binding):
            chat_id = await binding.ensure_chat()
            speaker = character_id
            if not speaker:
                room = await asyncio.to_thread(dispatcher.api().get, f"/muroom/{room_id}/")
                members = _room_character_ids(room)
                if not members:
                    raise BindingError(f"Room {room_id} has no characters")
                speaker = members[0]
            return await binding.client.chat.send_message(speaker, chat_id, message)

        return await dispatcher.call_bound("Group chat response", room_id, _send, kind="room")

    @mcp.tool()
    @tool_envelope
    async def group_chat_add_character(room_id: str, character_id: str):
        """
        Add a character to an existing group chat.

        Args:
            room_id: Room ID of the group chat
            character_id: Character ID to add
        """
        changes = room_character_patch("add", character_id)
        return await dispatcher.call_api(
            "Character added to group",
            lambda api: api.patch(f"/muroom/{room_id}/", changes),
        )

    @mcp.tool()
    @tool_envelope
    async def group_chat_remove_character(room_id: str, character_id: str):
        """
        Remove a character from a group chat.

        Args:
            room_id: Room ID of the group chat
            character_id: Character ID to remove
        """
        changes = room_character_patch("remove", character_id)
        return await dispatcher.call_api(
            "Character removed from group",
            lambda api: api.patch(f"/muroom/{room_id}/", changes),
        )

    @mcp.tool()
    @tool_envelope
    async def group_chat_delete(room_id: str):
        """
        Delete a group chat room.

        Args:
            room_id: Room ID of the group chat to delete
        """
        return await dispatcher.call_api(
            "Group chat deleted",
            lambda api: api.delete(f"/muroom/{room_id}/"),
        )
