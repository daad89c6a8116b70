"""
Tests for the tool dispatcher and result formatting.

The dispatcher is the error boundary: every call must come back as a
ToolResult, never as an exception.
"""
import json
from datetime import datetime, timezone
from enum import Enum
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cai_bridge.dispatch import Dispatcher, ToolResult, format_payload
from cai_bridge.exceptions import ConfigurationError, PlatformAPIError
from cai_bridge.session import SessionManager


def _payload(result: ToolResult):
    """Parse the JSON embedded after the label."""
    _, body = result.text.split("\n\n", 1)
    return json.loads(body)


class Color(Enum):
    BLUE = "blue"


class TestFormatPayload:
    """Label + embedded JSON rendering."""

    def test_plain_data(self):
        text = format_payload("Results", {"a": 1, "b": [1, 2]})
        label, body = text.split("\n\n", 1)
        assert label == "Results:"
        assert json.loads(body) == {"a": 1, "b": [1, 2]}

    def test_objects_use_public_attributes(self):
        turn = SimpleNamespace(
            turn_id="t1",
            created=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            candidates={"c1": SimpleNamespace(candidate_id="c1", text="Hi")},
            color=Color.BLUE,
            tags=("a", "b"),
        )
        turn._private = "hidden"

        data = json.loads(format_payload("Turn", turn).split("\n\n", 1)[1])
        assert data == {
            "turn_id": "t1",
            "created": "2026-01-02T03:04:05+00:00",
            "candidates": {"c1": {"candidate_id": "c1", "text": "Hi"}},
            "color": "blue",
            "tags": ["a", "b"],
        }

    def test_no_colon_after_punctuated_label(self):
        assert format_payload("Character created!", {}).startswith("Character created!\n\n")

    def test_unicode_kept(self):
        assert "héllo ✨" in format_payload("Msg", {"text": "héllo ✨"})

    def test_toon_output(self):
        encoder = MagicMock(return_value="text: hi")
        with patch("cai_bridge.dispatch._get_toon_encoder", return_value=encoder):
            text = format_payload("Msg", SimpleNamespace(text="hi"), toon=True)

        assert text == "Msg:\n\ntext: hi"
        encoder.assert_called_once_with({"text": "hi"})


class TestCall:
    """Stateless call pattern."""

    @pytest.mark.asyncio
    async def test_success_envelope(self, dispatcher, fake_client):
        fake_client.character.search_characters.return_value = [{"name": "Luna"}]

        result = await dispatcher.call(
            'Search results for "luna"',
            lambda client: client.character.search_characters("luna"),
        )

        assert result.success is True
        assert result.text.startswith('Search results for "luna":\n\n')
        assert _payload(result) == [{"name": "Luna"}]

    @pytest.mark.asyncio
    async def test_exception_becomes_error_envelope(self, dispatcher, fake_client):
        fake_client.account.fetch_me.side_effect = RuntimeError("boom")

        result = await dispatcher.call("Account", lambda client: client.account.fetch_me())

        assert result == ToolResult(False, "Error: boom")

    @pytest.mark.asyncio
    async def test_custom_error_prefix(self, dispatcher, fake_client):
        fake_client.account.fetch_me.side_effect = RuntimeError("boom")

        result = await dispatcher.call("Account", lambda c: c.account.fetch_me(), error_prefix="Error loading")

        assert result.text == "Error loading: boom"

    @pytest.mark.asyncio
    async def test_empty_exception_message_uses_type(self, dispatcher, fake_client):
        fake_client.account.fetch_me.side_effect = TimeoutError()

        result = await dispatcher.call("Account", lambda c: c.account.fetch_me())

        assert result.text == "Error: TimeoutError"

    @pytest.mark.asyncio
    async def test_missing_credential_is_error_without_network(self, test_config, client_factory):
        def _no_token():
            raise ConfigurationError("No Character AI token found.")

        dispatcher = Dispatcher(SessionManager(_no_token, client_factory=client_factory), test_config)
        result = await dispatcher.call("Account", lambda c: c.account.fetch_me())

        assert result.success is False
        assert "No Character AI token found" in result.text
        client_factory.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_auth_failure_reported_then_retried(self, test_config, fake_client):
        factory = AsyncMock(side_effect=[RuntimeError("Authentication failed"), fake_client])
        dispatcher = Dispatcher(SessionManager(lambda: "tok", client_factory=factory), test_config)
        fake_client.account.fetch_me.return_value = {"username": "me"}

        first = await dispatcher.call("Account", lambda c: c.account.fetch_me())
        second = await dispatcher.call("Account", lambda c: c.account.fetch_me())

        assert first == ToolResult(False, "Error: Authentication failed")
        assert second.success is True
        assert _payload(second) == {"username": "me"}

    @pytest.mark.asyncio
    async def test_text_result(self, dispatcher, client_factory):
        result = dispatcher.text("Shareable link:\n\nhttps://example")
        assert result == ToolResult(True, "Shareable link:\n\nhttps://example")
        client_factory.assert_not_awaited()


class TestCallBound:
    """Stateful call pattern."""

    @pytest.mark.asyncio
    async def test_success(self, dispatcher, session_manager, fake_client):
        fake_client.chat.send_message.return_value = {"turn_id": "t2", "text": "Hello there"}

        async def _send(binding):
            assert session_manager.current_binding is binding
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.send_message("char-1", chat_id, "hi")

        result = await dispatcher.call_bound("Character response", "char-1", _send)

        assert result.success is True
        assert _payload(result) == {"turn_id": "t2", "text": "Hello there"}
        fake_client.chat.send_message.assert_awaited_once_with("char-1", "chat-existing", "hi")
        assert session_manager.current_binding is None

    @pytest.mark.asyncio
    async def test_failure_releases_binding(self, dispatcher, session_manager, fake_client):
        fake_client.chat.send_message.side_effect = [RuntimeError("socket closed"), {"ok": True}]

        async def _send(binding):
            chat_id = await binding.ensure_chat()
            return await binding.client.chat.send_message(binding.entity_id, chat_id, "hi")

        failed = await dispatcher.call_bound("Character response", "char-1", _send)
        assert failed == ToolResult(False, "Error: socket closed")
        assert session_manager.current_binding is None

        recovered = await dispatcher.call_bound("Character response", "char-2", _send)
        assert recovered.success is True
        fake_client.chat.send_message.assert_awaited_with("char-2", "chat-existing", "hi")

    @pytest.mark.asyncio
    async def test_release_failure_keeps_original_error(self, dispatcher):
        async def _fail(binding):
            raise RuntimeError("original failure")

        with patch.object(SessionManager, "_release", side_effect=RuntimeError("unbind failed")):
            result = await dispatcher.call_bound("Label", "char-1", _fail)

        assert result == ToolResult(False, "Error: original failure")


class TestCallApi:
    """Direct HTTP call pattern."""

    @pytest.mark.asyncio
    async def test_success_uses_session_token(self, dispatcher, client_factory):
        seen = {}

        def _request(api):
            seen["token"] = api.token
            seen["base"] = api.config.api_base_url
            return {"status": "OK"}

        result = await dispatcher.call_api("Scene details", _request)

        assert result.success is True
        assert _payload(result) == {"status": "OK"}
        assert seen == {"token": "test-token-12345", "base": "https://neo.test.invalid"}
        client_factory.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_api_error_envelope(self, dispatcher):
        def _request(api):
            raise PlatformAPIError(403, "forbidden")

        result = await dispatcher.call_api("Scene", _request, error_prefix="Error creating scene")

        assert result == ToolResult(False, "Error creating scene: API 403: forbidden")

    @pytest.mark.asyncio
    async def test_login_failure_skips_request(self, test_config):
        factory = AsyncMock(side_effect=RuntimeError("bad token"))
        dispatcher = Dispatcher(SessionManager(lambda: "tok", client_factory=factory), test_config)
        request = MagicMock()

        result = await dispatcher.call_api("Scene", request)

        assert result == ToolResult(False, "Error: bad token")
        request.assert_not_called()
