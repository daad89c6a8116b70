"""
Account tools for the Character AI MCP server.
"""
from mcp_server.envelope import tool_envelope


def register_account(mcp, dispatcher):
    """Register the account tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def user_info():
        """Get your Character AI account information."""
        return await dispatcher.call(
            "Your account info",
            lambda client: client.account.fetch_me(),
        )

    @mcp.tool()
    @tool_envelope
    async def user_settings():
        """Get your account settings."""
        return await dispatcher.call(
            "Settings",
            lambda client: client.account.fetch_my_settings(),
        )

    @mcp.tool()
    @tool_envelope
    async def liked_characters():
        """Get list of characters you have liked/voted for."""
        return await dispatcher.call(
            "Liked characters",
            lambda client: client.account.fetch_my_upvoted_characters(),
        )
