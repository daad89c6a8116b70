"""
Configuration for the Character AI bridge.

Config file (optional): ~/.cai-mcp/config.json
Credential searched in order:
1. CAI_TOKEN environment variable
2. Token file (~/.cai-mcp/.cai-token, or CAI_TOKEN_FILE)
3. Interactive prompt (cai-get-token only)
"""
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cai_bridge.exceptions import ConfigurationError


CONFIG_DIR = Path.home() / ".cai-mcp"
CONFIG_PATH = CONFIG_DIR / "config.json"
# User-owned, never inside the installed package
DEFAULT_TOKEN_FILE = CONFIG_DIR / ".cai-token"

_DEFAULTS = {
    "api_base_url": "https://neo.character.ai",
    "plus_base_url": "https://plus.character.ai",
    "request_timeout": 30,
    "toon_output": False,
    "log_level": "INFO",
}

# Matching quote pairs stripped from pasted tokens
_QUOTE_PAIRS = (('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’"))
_TOKEN_PREFIX = "token "


@dataclass
class BridgeConfig:
    """Bridge configuration."""
    token: Optional[str] = None
    token_file: Path = DEFAULT_TOKEN_FILE
    api_base_url: str = "https://neo.character.ai"
    plus_base_url: str = "https://plus.character.ai"
    request_timeout: float = 30
    toon_output: bool = False
    log_level: str = "INFO"


def _load_json_file(path: Path) -> dict:
    """Load a JSON file, return empty dict if missing or invalid."""
    try:
        if path.exists():
            with open(path, "r") as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def normalize_token(raw: Optional[str]) -> str:
    """
    Clean a pasted token.

    Trims whitespace, strips one layer of matching quotes (straight or
    curly) and a case-insensitive "Token " scheme prefix. Returns "" for
    empty input.

    Only one layer of each is removed, so the function is idempotent only
    for tokens whose cleaned value does not itself start with a quote pair
    or "Token ". normalize_token("Token Token x") is "Token x", and a second
    pass would give "x".
    """
    if not raw:
        return ""
    token = raw.strip()
    for opening, closing in _QUOTE_PAIRS:
        if len(token) >= 2 and token.startswith(opening) and token.endswith(closing):
            token = token[1:-1]
            break
    if token.lower().startswith(_TOKEN_PREFIX):
        token = token[len(_TOKEN_PREFIX):]
    return token.strip()


def read_token_file(path: Path) -> Optional[str]:
    """Read a saved token. None if the file is missing, unreadable or empty."""
    try:
        if not path.exists():
            return None
        token = normalize_token(path.read_text(encoding="utf-8"))
    except OSError:
        return None
    return token or None


def write_token_file(path: Path, token: str) -> str:
    """Normalize and save a token, returning what was written."""
    cleaned = normalize_token(token)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(cleaned, encoding="utf-8")
    return cleaned


def token_file_path(file_config: Optional[dict] = None) -> Path:
    """
    Resolve where the token file lives: CAI_TOKEN_FILE, then the config
    file's "token_file", then DEFAULT_TOKEN_FILE. Reads no other setting.
    """
    if file_config is None:
        file_config = _load_json_file(CONFIG_PATH)
    token_file = os.environ.get("CAI_TOKEN_FILE") or file_config.get("token_file")
    return Path(token_file).expanduser() if token_file else DEFAULT_TOKEN_FILE


def load_config() -> BridgeConfig:
    """
    Load bridge configuration.

    Merges defaults with the config file, then applies environment
    overrides. The token itself is left unresolved if the environment
    and config file do not set it; see resolve_token().
    """
    data = _load_json_file(CONFIG_PATH)
    merged = {**_DEFAULTS, **data}

    timeout = os.environ.get("CAI_REQUEST_TIMEOUT")
    toon = os.environ.get("CAI_TOON_OUTPUT")

    try:
        request_timeout = float(timeout) if timeout else float(merged["request_timeout"])
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid request timeout: {timeout or merged['request_timeout']!r}")

    return BridgeConfig(
        token=normalize_token(os.environ.get("CAI_TOKEN") or data.get("token")) or None,
        token_file=token_file_path(data),
        api_base_url=(os.environ.get("CAI_API_BASE_URL") or merged["api_base_url"]).rstrip("/"),
        plus_base_url=(os.environ.get("CAI_PLUS_BASE_URL") or merged["plus_base_url"]).rstrip("/"),
        request_timeout=request_timeout,
        toon_output=_env_bool(toon) if toon is not None else bool(merged["toon_output"]),
        log_level=(os.environ.get("CAI_LOG_LEVEL") or merged["log_level"]).upper(),
    )


def resolve_token(config: BridgeConfig) -> str:
    """
    Resolve the credential: environment/config value first, then the token file.

    Raises:
        ConfigurationError: if no source yields a non-empty token
    """
    if config.token:
        return config.token

    token = read_token_file(config.token_file)
    if token:
        return token

    raise ConfigurationError(
        "No Character AI token found. Run 'cai-get-token' to save one, "
        "or set the CAI_TOKEN environment variable in your MCP config."
    )
