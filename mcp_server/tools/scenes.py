"""
Scene tools for the Character AI MCP server.
"""
from typing import List, Literal, Optional

from cai_bridge.api import scene_create_body
from mcp_server.envelope import tool_envelope


def register_scenes(mcp, dispatcher):
    """Register the scene tools with the MCP server."""

    @mcp.tool()
    @tool_envelope
    async def create_scene(
        name: str,
        character_id: str,
        scene_setting: str,
        player_goal: str,
        intro: str,
        greeting: str,
        tags: Optional[List[str]] = None,
        visibility: Optional[Literal["PUBLIC", "UNLISTED", "PRIVATE"]] = None,
    ):
        """
        Create a new scene/scenario on Character AI. Scenes have a setting,
        player goal, intro, greeting, name, and tags.

        Args:
            name: Scene name/title (max 40 chars, required)
            character_id: Character ID to use in the scene
            scene_setting: Scene setting - high-level description of the environment and context (max 650 chars)
            player_goal: Player goal - what the user should try to accomplish (max 120 chars)
            intro: Introduce this scene - opening text the audience sees before entering (max 650 chars)
            greeting: Character greeting - first message the character sends when scene starts (max 1200 chars)
            tags: Tags for the scene (e.g. ['Fantasy', 'Romance', 'Mystery'])
            visibility: Scene visibility (default: PRIVATE)
        """
        body = scene_create_body(
            name=name,
            character_id=character_id,
            scene_setting=scene_setting,
            player_goal=player_goal,
            intro=intro,
            greeting=greeting,
            tags=tags,
            visibility=visibility,
        )
        return await dispatcher.call_api(
            "Scene created!",
            lambda api: api.post("/chat/scene/create/", body),
            error_prefix="Error creating scene",
        )

    @mcp.tool()
    @tool_envelope
    async def get_scene(scene_id: str):
        """
        Get details about a specific scene.

        Args:
            scene_id: Scene ID to get details for
        """
        return await dispatcher.call_api(
            "Scene details",
            lambda api: api.get(f"/chat/character/scene/{scene_id}/"),
        )
