"""
Tool dispatcher: runs one logical platform operation and returns a ToolResult.

Three call patterns:
- call():       stateless, one client operation on the shared session
- call_bound(): the operation runs inside SessionManager.bind()
- call_api():   a direct HTTP request after the session is established

Every failure is caught here and turned into ToolResult(success=False).
Nothing raised by the client library, requests or the bridge itself gets
past this boundary.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Awaitable, Callable

from cai_bridge.api import PlatformAPI
from cai_bridge.config import BridgeConfig
from cai_bridge.session import Binding, SessionManager

logger = logging.getLogger(__name__)

# Lazy import toons; only needed when TOON output is enabled
_toon_encode = None


def _get_toon_encoder():
    """Lazy-load the TOON encoder. Raises ImportError if toons is not installed."""
    global _toon_encode
    if _toon_encode is None:
        from toons import dumps as toon_encode
        _toon_encode = toon_encode
    return _toon_encode


@dataclass(frozen=True)
class ToolResult:
    """The only shape a tool call produces."""
    success: bool
    text: str


def _json_default(obj: Any) -> Any:
    """Fallback for objects json can't encode: client library models, datetimes."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if hasattr(obj, "__dict__"):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    return str(obj)


def format_payload(label: str, data: Any, toon: bool = False) -> str:
    """Render a result as "<label>:\\n\\n<JSON or TOON>"."""
    if toon:
        plain = json.loads(json.dumps(data, default=_json_default))
        body = _get_toon_encoder()(plain)
    else:
        body = json.dumps(data, indent=2, default=_json_default, ensure_ascii=False)
    # Labels like "Character created!" already end in punctuation
    separator = "" if label.endswith(("!", ":", ".", "?")) else ":"
    return f"{label}{separator}\n\n{body}"


def _error_text(prefix: str, exc: BaseException) -> str:
    message = str(exc) or type(exc).__name__
    return f"{prefix}: {message}"


class Dispatcher:
    """Executes tool operations against the shared session."""

    def __init__(self, sessions: SessionManager, config: BridgeConfig):
        self.sessions = sessions
        self.config = config

    def _ok(self, label: str, data: Any) -> ToolResult:
        return ToolResult(True, format_payload(label, data, toon=self.config.toon_output))

    def _fail(self, label: str, prefix: str, exc: Exception) -> ToolResult:
        logger.warning("%s failed: %s", label, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
        return ToolResult(False, _error_text(prefix, exc))

    def api(self) -> PlatformAPI:
        """HTTP client for the current session's token. Call after ensure_session()."""
        return PlatformAPI(self.config, self.sessions.token)

    def text(self, text: str) -> ToolResult:
        """Success result that needed no platform call."""
        return ToolResult(True, text)

    async def call(
        self,
        label: str,
        operation: Callable[[Any], Awaitable[Any]],
        error_prefix: str = "Error",
    ) -> ToolResult:
        """ensure_session -> operation(client) -> serialize."""
        try:
            client = await self.sessions.ensure_session()
            result = await operation(client)
            return self._ok(label, result)
        except Exception as e:
            return self._fail(label, error_prefix, e)

    async def call_bound(
        self,
        label: str,
        entity_id: str,
        operation: Callable[[Binding], Awaitable[Any]],
        error_prefix: str = "Error",
        kind: str = "character",
    ) -> ToolResult:
        """ensure_session -> bind(entity) -> operation(binding) -> unbind -> serialize."""
        try:
            async with self.sessions.bind(entity_id, kind=kind) as binding:
                result = await operation(binding)
            return self._ok(label, result)
        except Exception as e:
            return self._fail(label, error_prefix, e)

    async def call_api(
        self,
        label: str,
        request: Callable[[PlatformAPI], Any],
        error_prefix: str = "Error",
    ) -> ToolResult:
        """ensure_session -> blocking HTTP request in a worker thread -> serialize."""
        try:
            await self.sessions.ensure_session()
            result = await asyncio.to_thread(request, self.api())
            return self._ok(label, result)
        except Exception as e:
            return self._fail(label, error_prefix, e)
