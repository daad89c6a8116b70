"""
Pytest configuration for tests.

Isolates every test from the developer's real environment: CAI_* variables
are cleared, the optional config file points at a temp path, and the token
file lives in tmp_path. No test talks to the network.
"""
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

import cai_bridge.config as config_module
from cai_bridge.config import BridgeConfig
from cai_bridge.dispatch import Dispatcher
from cai_bridge.session import SessionManager


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Clear CAI_* env vars and hide any real ~/.cai-mcp/config.json."""
    for key in list(os.environ):
        if key.startswith("CAI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "config.json")
    monkeypatch.setattr(config_module, "DEFAULT_TOKEN_FILE", tmp_path / ".cai-token")
    yield


@pytest.fixture
def token_file(tmp_path):
    return tmp_path / ".cai-token"


@pytest.fixture
def test_config(token_file):
    """A BridgeConfig with a token and test hosts."""
    return BridgeConfig(
        token="test-token-12345",
        token_file=token_file,
        api_base_url="https://neo.test.invalid",
        plus_base_url="https://plus.test.invalid",
        request_timeout=5,
    )


@pytest.fixture
def fake_client():
    """
    Stand-in for an authenticated PyCharacterAI client.

    Every attribute is an AsyncMock; tests set return values for the calls
    they care about. fetch_chats returns one existing chat by default.
    """
    client = AsyncMock()
    client.chat.fetch_chats.return_value = [SimpleNamespace(chat_id="chat-existing")]
    client.chat.create_chat.return_value = (
        SimpleNamespace(chat_id="chat-new"),
        SimpleNamespace(turn_id="turn-greeting", text="Hello!"),
    )
    return client


@pytest.fixture
def client_factory(fake_client):
    """Client factory returning fake_client; records the tokens it was given."""
    return AsyncMock(return_value=fake_client)


@pytest.fixture
def session_manager(client_factory):
    return SessionManager(lambda: "test-token-12345", client_factory=client_factory)


@pytest.fixture
def dispatcher(session_manager, test_config):
    return Dispatcher(session_manager, test_config)
