"""
Tests for the interactive token helper (cai-get-token).
"""
import json
import sys
from unittest.mock import patch

import pytest

from cai_bridge import token_setup
from cai_bridge.token_setup import run


def _answer(value):
    """Patch the helper's prompt to return a fixed answer."""
    return patch.object(token_setup, "prompt", return_value=value)


class TestFirstTimeSetup:

    def test_saves_normalized_token(self, token_file, capsys):
        with _answer('  "Token abc123"  '):
            assert run(token_file) == 0

        assert token_file.read_text() == "abc123"
        out = capsys.readouterr().out
        assert "char_token" in out
        assert f"Token saved to {token_file}" in out
        assert '"character-ai"' in out

    def test_empty_input_exits_1(self, token_file, capsys):
        with _answer("   "):
            assert run(token_file) == 1

        assert not token_file.exists()
        assert "No token provided" in capsys.readouterr().out

    def test_quotes_only_exits_1(self, token_file):
        with _answer('""'):
            assert run(token_file) == 1
        assert not token_file.exists()

    def test_eof_counts_as_empty(self, token_file):
        with patch("builtins.input", side_effect=EOFError):
            assert run(token_file) == 1

    def test_empty_file_treated_as_missing(self, token_file):
        token_file.write_text("\n")
        with _answer("fresh"):
            assert run(token_file) == 0
        assert token_file.read_text() == "fresh"

    def test_unwritable_location_exits_1(self, token_file, capsys):
        with _answer("abc"), \
                patch.object(token_setup, "write_token_file", side_effect=PermissionError("read-only")):
            assert run(token_file) == 1

        out = capsys.readouterr().out
        assert f"Could not save token to {token_file}: read-only" in out
        assert "Token saved" not in out


class TestExistingToken:

    def test_shows_and_keeps_token(self, token_file, capsys):
        token_file.write_text("saved-token")

        with _answer(""):
            assert run(token_file) == 0

        assert token_file.read_text() == "saved-token"
        out = capsys.readouterr().out
        assert "Token already saved!" in out
        assert "saved-token" in out

    def test_overwrites_when_new_token_given(self, token_file, capsys):
        token_file.write_text("saved-token")

        with _answer("'new-token'"):
            assert run(token_file) == 0

        assert token_file.read_text() == "new-token"
        assert "Token updated!" in capsys.readouterr().out

    def test_failed_update_exits_1_and_keeps_token(self, token_file, capsys):
        token_file.write_text("saved-token")

        with _answer("new-token"), \
                patch.object(token_setup, "write_token_file", side_effect=OSError("disk full")):
            assert run(token_file) == 1

        assert token_file.read_text() == "saved-token"
        assert "Could not save token" in capsys.readouterr().out


class TestMain:

    def test_token_file_flag(self, tmp_path, monkeypatch):
        target = tmp_path / "custom" / "token"
        monkeypatch.setattr(sys, "argv", ["cai-get-token", "--token-file", str(target)])

        with _answer("abc"), pytest.raises(SystemExit) as exc_info:
            token_setup.main()

        assert exc_info.value.code == 0
        assert target.read_text() == "abc"

    def test_default_token_file_from_env(self, tmp_path, monkeypatch):
        target = tmp_path / "env-token-file"
        monkeypatch.setenv("CAI_TOKEN_FILE", str(target))
        monkeypatch.setattr(sys, "argv", ["cai-get-token"])

        with _answer(""), pytest.raises(SystemExit) as exc_info:
            token_setup.main()

        assert exc_info.value.code == 1
        assert not target.exists()

    def test_invalid_unrelated_setting_does_not_crash(self, tmp_path, monkeypatch):
        target = tmp_path / "env-token-file"
        monkeypatch.setenv("CAI_TOKEN_FILE", str(target))
        monkeypatch.setenv("CAI_REQUEST_TIMEOUT", "not-a-number")
        monkeypatch.setattr(sys, "argv", ["cai-get-token"])

        with _answer("abc"), pytest.raises(SystemExit) as exc_info:
            token_setup.main()

        assert exc_info.value.code == 0
        assert target.read_text() == "abc"

    def test_default_location_without_overrides(self, token_file, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["cai-get-token"])

        with _answer("abc"), pytest.raises(SystemExit) as exc_info:
            token_setup.main()

        assert exc_info.value.code == 0
        assert token_file.read_text() == "abc"

    def test_config_snippet_is_valid_json(self, capsys):
        token_setup._print_mcp_config()
        out = capsys.readouterr().out
        start = out.index("{")
        end = out.rindex("}") + 1
        assert "character-ai" in json.loads(out[start:end])
