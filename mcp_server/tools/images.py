"""
Image generation tools for the Character AI MCP server.
"""
from cai_bridge.api import avatar_body
from mcp_server.envelope import tool_envelope


def register_images(mcp, dispatcher):
    """Register the image tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def generate_image(prompt: str):
        """
        Generate images from a text prompt. Returns the image URLs.

        Args:
            prompt: Text prompt describing the image to generate
        """
        return await dispatcher.call(
            "Generated image",
            lambda client: client.utils.generate_image(prompt),
        )

    @mcp.tool()
    @tool_envelope
    async def generate_avatar(prompt: str):
        """
        Generate avatar image candidates from a text prompt.

        Args:
            prompt: Text prompt describing the avatar to generate
        """
        body = avatar_body(prompt)
        return await dispatcher.call_api(
            "Generated avatar",
            lambda api: api.post("/chat/character/generate-avatar-options", body, host="plus"),
            error_prefix="Error generating avatar",
        )
