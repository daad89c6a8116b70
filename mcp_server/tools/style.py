"""
Chat style & customization tools for the Character AI MCP server.
"""
from typing import Optional

from cai_bridge.api import style_update_body
from mcp_server.envelope import tool_envelope


def register_style(mcp, dispatcher):
    """Register the style and customization tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def set_character_style(
        character_id: str,
        style: Optional[str] = None,
        start_new_chat: bool = False,
    ):
        """
        Set the AI response style/model for a character chat. In the CAI app,
        this is under 'Style' or 'New chat' menu. Each style changes how the AI responds.

        Args:
            character_id: Character ID to set style for
            style: Style name. Available: 'roar' (speed/smarts, DEFAULT), 'pipsqueak' (concise/short), 'deepsqueak' (roleplay), 'nyan' (thoughtful), 'softlaunch', 'dynamic' (experimental), 'goro' (experimental), 'default'
            start_new_chat: If true, starts a new chat with the selected style. If false, continues current chat with new style (default: false)
        """
        body = style_update_body(character_id, style, start_new_chat)
        label = f'Style set to "{body["style_name"]}"' + (" (new chat started)" if start_new_chat else "") + "!"
        return await dispatcher.call_api(
            label,
            lambda api: api.post("/chat/character/style/update/", body),
            error_prefix="Error setting style",
        )

    @mcp.tool()
    @tool_envelope
    async def customize_chat(character_id: str, chat_color: Optional[str] = None):
        """
        Customize the chat appearance (chat bubble color). This is the
        'Customize' menu in CAI (c.ai+ feature).

        Args:
            character_id: Character ID to customize chat for
            chat_color: Chat bubble color name (e.g. 'blue', 'green', 'purple', 'pink', 'orange', 'red')
        """
        body = {"external_id": character_id, "chat_color": chat_color or ""}
        return await dispatcher.call_api(
            "Chat customized!",
            lambda api: api.post("/chat/character/customize/", body),
            error_prefix="Error customizing chat",
        )
