"""
Direct Character AI HTTP endpoints.

Character creation and updates, voting, scenes, voices, style and
customization, group-chat rooms and a few discovery feeds go straight to
the platform API. Some of these have client-library counterparts; the
direct calls are kept so the endpoints and payloads stay exactly the ones
the tools have always sent.
Calls are blocking (requests); the dispatcher runs them in a worker thread.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

import requests

from cai_bridge.config import BridgeConfig
from cai_bridge.exceptions import PlatformAPIError

logger = logging.getLogger(__name__)


class PlatformAPI:
    """JSON-over-HTTPS client for the primary ("neo") and "plus" hosts."""

    def __init__(self, config: BridgeConfig, token: str):
        self.config = config
        self.token = token

    def _base_url(self, host: str) -> str:
        if host == "neo":
            return self.config.api_base_url
        if host == "plus":
            return self.config.plus_base_url
        raise ValueError(f"Unknown host: '{host}'. Must be 'neo' or 'plus'.")

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Token {self.token}",
        }

    def request(self, method: str, endpoint: str, body: Any = None,
                host: str = "neo", params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make one API call and return the decoded JSON body.

        Raises:
            PlatformAPIError: on network failure or a non-2xx status
        """
        url = f"{self._base_url(host)}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                json=body,
                params=params,
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise PlatformAPIError(None, str(e)) from e

        if not response.ok:
            raise PlatformAPIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}

    def post(self, endpoint: str, body: Dict[str, Any], host: str = "neo") -> Any:
        return self.request("POST", endpoint, body=body, host=host)

    def get(self, endpoint: str, host: str = "neo", params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, host=host, params=params)

    def patch(self, endpoint: str, body: Any, host: str = "neo") -> Any:
        return self.request("PATCH", endpoint, body=body, host=host)

    def delete(self, endpoint: str, host: str = "neo") -> Any:
        return self.request("DELETE", endpoint, host=host)


# ── Request bodies ───────────────────────────────────────────────────

def character_create_body(
    name: str,
    greeting: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    definition: Optional[str] = None,
    visibility: Optional[str] = None,
) -> Dict[str, Any]:
    """Full create_character payload; the platform rejects partial bodies."""
    greeting = greeting or ""
    return {
        "name": name,
        "greeting": greeting,
        "greetings": [greeting],
        "title": title or "",
        "description": description or "",
        "definition": definition or "",
        "visibility": visibility or "PRIVATE",
        "copyable": False,
        "dynamic_greeting_enabled": False,
        "allow_dynamic_greeting": True,
        "voice_id": "",
        "default_voice_id": "",
        "tags": [],
        "categories": [],
        "additional_greetings": [],
        "avatar_rel_path": "",
        "img_gen_enabled": False,
        "base_img_prompt": "",
        "strip_img_prompt_from_msg": False,
        "identifier": f"id:{uuid.uuid4()}",
    }


def character_update_body(character_id: str, **fields: Optional[str]) -> Dict[str, Any]:
    """update_character payload carrying only the fields that were supplied."""
    body: Dict[str, Any] = {"external_id": character_id}
    for key, value in fields.items():
        if value is not None:
            body[key] = value
    return body


def scene_create_body(
    name: str,
    character_id: str,
    scene_setting: str,
    player_goal: str,
    intro: str,
    greeting: str,
    tags: Optional[List[str]] = None,
    visibility: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "name": name,
        "description": scene_setting or "",
        "goal": player_goal or "",
        "intro": intro or "",
        "greeting": greeting or "",
        "character_id": character_id,
        "visibility": visibility or "PRIVATE",
        "tags": list(tags or []),
    }


def voice_create_body(
    name: str,
    voice_prompt: str,
    description: Optional[str] = None,
    visibility: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description or "",
        "voice_prompt": voice_prompt or "",
        "visibility": visibility or "private",
    }


def style_update_body(character_id: str, style: Optional[str], start_new_chat: bool) -> Dict[str, Any]:
    return {
        "external_id": character_id,
        "style_name": (style or "roar").lower(),
        "new_chat": bool(start_new_chat),
    }


def vote_body(character_id: str, like: bool) -> Dict[str, Any]:
    return {
        "external_id": character_id,
        "label": "like" if like else "none",
    }


def room_create_body(title: str, character_id: str) -> Dict[str, Any]:
    """muroom/create payload: an unlisted room that opens with a greeting."""
    return {
        "characters": [character_id],
        "title": title,
        "settings": {
            "anyone_can_join": True,
            "require_approval": False,
        },
        "visibility": "VISIBILITY_UNLISTED",
        "with_greeting": True,
    }


def room_character_patch(op: str, character_id: str) -> List[Dict[str, Any]]:
    """JSON-patch list adding a character to, or removing one from, a room."""
    if op not in ("add", "remove"):
        raise ValueError(f"Unknown room operation: '{op}'. Must be 'add' or 'remove'.")
    change: Dict[str, Any] = {"op": op, "path": f"/characters/{character_id}"}
    if op == "add":
        change["value"] = {"id": character_id}
    return [change]


def avatar_body(prompt: str, num_candidates: int = 4) -> Dict[str, Any]:
    return {
        "prompt": prompt,
        "num_candidates": num_candidates,
        "model_version": "v1",
    }
