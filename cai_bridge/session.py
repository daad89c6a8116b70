"""
Shared Character AI session and entity binding.

One client handle exists per process. It is created lazily on the first
tool call and reused by every later call. Operations that act "as" a
character run inside bind(), which holds the single binding slot for the
whole connect -> operate -> disconnect sequence so concurrent tool calls
can never see each other's binding.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from cai_bridge.exceptions import BindingError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Awaitable[Any]]


async def default_client_factory(token: str) -> Any:
    """Create and authenticate a PyCharacterAI client."""
    # Imported lazily so config/dispatch tests don't need the client library loaded
    from PyCharacterAI import get_client

    return await get_client(token=token)


class Binding:
    """
    Call-scoped association of the shared session with one entity.

    The chat is resolved on first use: the entity's most recent chat,
    or a fresh one if it has none. A group-chat room is its own chat, so
    a "room" binding uses the room id directly.
    """

    def __init__(self, client: Any, entity_id: str, kind: str = "character"):
        self.client = client
        self.entity_id = entity_id
        self.kind = kind
        self.chat_id: Optional[str] = None
        self.active = True

    def _check_active(self) -> None:
        if not self.active:
            raise BindingError(f"Binding to {self.kind} {self.entity_id} was already released")

    async def ensure_chat(self) -> str:
        """Return the bound chat id, resolving it on first call."""
        self._check_active()
        if self.chat_id is None and self.kind == "room":
            self.chat_id = self.entity_id
        if self.chat_id is None:
            chats = await self.client.chat.fetch_chats(self.entity_id)
            if chats:
                self.chat_id = chats[0].chat_id
            else:
                chat, _ = await self.client.chat.create_chat(self.entity_id)
                self.chat_id = chat.chat_id
            logger.debug("Bound %s %s to chat %s", self.kind, self.entity_id, self.chat_id)
        return self.chat_id

    async def start_new_chat(self, greeting: bool = True):
        """Start a new chat with the entity and bind to it. Returns (chat, greeting_turn)."""
        self._check_active()
        if self.kind == "room":
            raise BindingError(f"Room {self.entity_id} is a single chat; create a new room instead")
        chat, greeting_turn = await self.client.chat.create_chat(self.entity_id, greeting=greeting)
        self.chat_id = chat.chat_id
        return chat, greeting_turn

    def __repr__(self) -> str:
        return f"Binding(kind={self.kind!r}, entity_id={self.entity_id!r}, chat_id={self.chat_id!r})"


class SessionManager:
    """
    Owns the process-wide client handle and the single binding slot.

    Args:
        token_provider: Returns the credential. Called only when a session
            has to be created, so a missing token fails the call before any
            network traffic.
        client_factory: Coroutine creating an authenticated client from a token.
    """

    def __init__(
        self,
        token_provider: Callable[[], str],
        client_factory: ClientFactory = default_client_factory,
    ):
        self._token_provider = token_provider
        self._client_factory = client_factory
        self._client: Any = None
        self._binding: Optional[Binding] = None
        self.token: Optional[str] = None
        self._session_lock = asyncio.Lock()
        self._binding_lock = asyncio.Lock()

    @property
    def has_session(self) -> bool:
        return self._client is not None

    @property
    def current_binding(self) -> Optional[Binding]:
        """The live binding, or None when no bound call is running."""
        return self._binding

    async def ensure_session(self) -> Any:
        """
        Return the shared client, creating and authenticating it if needed.

        A failed login caches nothing; the next call starts over.
        """
        if self._client is not None:
            return self._client

        async with self._session_lock:
            if self._client is None:
                token = self._token_provider()
                logger.info("Logging in to Character AI")
                client = await self._client_factory(token)
                self.token = token
                self._client = client
                logger.info("Character AI session established")
        return self._client

    @asynccontextmanager
    async def bind(self, entity_id: str, kind: str = "character") -> AsyncIterator[Binding]:
        """
        Bind the shared session to one entity for the duration of the block.

        The binding is released on every exit path. A failure while
        releasing is logged and never replaces the error from the block.
        """
        async with self._binding_lock:
            client = await self.ensure_session()
            binding = Binding(client, entity_id, kind=kind)
            self._binding = binding
            try:
                yield binding
            finally:
                try:
                    self._release(binding)
                except Exception:
                    logger.warning("Failed to release binding %r", binding, exc_info=True)
                finally:
                    self._binding = None

    def _release(self, binding: Binding) -> None:
        binding.active = False
        binding.client = None

    async def close(self) -> None:
        """Close the client session, if one was opened."""
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.close_session()
        except Exception:
            logger.warning("Error closing Character AI session", exc_info=True)
