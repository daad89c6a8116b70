"""
Search & discovery tools for the Character AI MCP server.

Scene search and the trending feed come from the platform API; the rest
go through the client library.
"""
from mcp_server.envelope import tool_envelope


def register_search(mcp, dispatcher):
    """Register the search and discovery tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def search_characters(query: str):
        """
        Search for Character AI characters by query.

        Args:
            query: Search query to find characters
        """
        return await dispatcher.call(
            f'Search results for "{query}"',
            lambda client: client.character.search_characters(query),
        )

    @mcp.tool()
    @tool_envelope
    async def search_creators(query: str):
        """
        Search for character creators by username.

        Args:
            query: Creator name to search for
        """
        return await dispatcher.call(
            f'Creators for "{query}"',
            lambda client: client.character.search_creators(query),
        )

    @mcp.tool()
    @tool_envelope
    async def search_voices(query: str):
        """
        Search for available voices on Character AI.

        Args:
            query: Search query for voices
        """
        return await dispatcher.call(
            f'Voices for "{query}"',
            lambda client: client.utils.search_voices(query),
        )

    @mcp.tool()
    @tool_envelope
    async def search_scenes(query: str):
        """
        Search for scenes/scenarios on Character AI.

        Args:
            query: Search query for scenes
        """
        return await dispatcher.call_api(
            f'Scenes for "{query}"',
            lambda api: api.get("/search/v1/scene", params={"query": query}),
        )

    @mcp.tool()
    @tool_envelope
    async def get_trending():
        """Get trending characters on Character AI."""
        return await dispatcher.call_api(
            "Trending characters",
            lambda api: api.get("/chat/characters/trending/", host="plus"),
        )

    @mcp.tool()
    @tool_envelope
    async def get_recommended():
        """Get characters recommended for your account."""
        return await dispatcher.call(
            "Recommended characters",
            lambda client: client.character.fetch_recommended_characters(),
        )

    @mcp.tool()
    @tool_envelope
    async def get_featured():
        """Get featured characters on Character AI."""
        return await dispatcher.call(
            "Featured characters",
            lambda client: client.character.fetch_featured_characters(),
        )

    @mcp.tool()
    @tool_envelope
    async def get_categories():
        """Get characters grouped by category."""
        return await dispatcher.call(
            "Categories",
            lambda client: client.character.fetch_characters_by_category(),
        )

    @mcp.tool()
    @tool_envelope
    async def similar_characters(character_id: str):
        """
        Find characters similar to a given character.

        Args:
            character_id: Character ID to find similar characters for
        """
        return await dispatcher.call(
            "Similar characters",
            lambda client: client.character.fetch_similar_characters(character_id),
        )
