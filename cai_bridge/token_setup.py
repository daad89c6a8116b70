"""
Interactive helper that saves a Character AI auth token.

Usage:
    cai-get-token [--token-file PATH]
    python -m cai_bridge.token_setup

Exit codes: 0 = token saved or existing token kept, 1 = no token supplied
or the token file could not be written.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from cai_bridge.config import read_token_file, token_file_path, write_token_file

INSTRUCTIONS = """
To get your token, follow these steps:

  1. Open https://character.ai in Chrome (log in if needed)
  2. Press F12 to open DevTools
  3. Click the "Application" tab (or "Storage" in Firefox)
  4. In the left sidebar, click "Local Storage" > "https://character.ai"
  5. Find the key: "char_token"
  6. Copy the value (a long string of letters/numbers)

  OR (easier method):

  1. Open https://character.ai in Chrome (log in if needed)
  2. Press F12 > Console tab
  3. Paste this and press Enter:

     JSON.parse(localStorage.getItem("char_token")).value

  4. Copy the token string that appears
"""


def prompt(message: str = "> ") -> str:
    """Read one line from the user. EOF counts as an empty answer."""
    try:
        return input(message)
    except EOFError:
        return ""


def _print_mcp_config() -> None:
    snippet = {
        "character-ai": {
            "command": "character-ai-mcp",
            "args": [],
        }
    }
    print("You can now use the MCP server! Add this to your MCP config:")
    print("")
    print(json.dumps(snippet, indent=2))
    print("")
    print("No need for the CAI_TOKEN env variable - the server reads the saved token automatically.")


def update_existing(token_file: Path, saved_token: str) -> int:
    """Show the saved token and offer to replace it. Empty input keeps it."""
    print("")
    print("Token already saved!")
    print("")
    print("Your token:")
    print(saved_token)
    print("")
    print(f"To use a different token, delete {token_file} and run again.")
    print("Or paste a new token below (or press Enter to keep current):")

    answer = prompt()
    if answer.strip():
        try:
            write_token_file(token_file, answer)
        except OSError as e:
            print(f"Could not save token to {token_file}: {e}")
            return 1
        print("Token updated!")
    return 0


def first_time_setup(token_file: Path) -> int:
    """Walk the user through extracting a token and save it."""
    print("")
    print("=" * 53)
    print("  Character AI Token Setup")
    print("=" * 53)
    print(INSTRUCTIONS)
    print("Paste your token below:")

    answer = prompt()
    if not answer.strip():
        print("No token provided. Exiting.")
        return 1

    try:
        cleaned = write_token_file(token_file, answer)
    except OSError as e:
        print(f"Could not save token to {token_file}: {e}")
        return 1
    if not cleaned:
        print("No token provided. Exiting.")
        token_file.unlink(missing_ok=True)
        return 1

    print("")
    print(f"Token saved to {token_file}")
    print("")
    _print_mcp_config()
    return 0


def run(token_file: Optional[Path] = None) -> int:
    """Run the helper and return the process exit code."""
    if token_file is None:
        # Only the token location matters here; other settings may be invalid
        token_file = token_file_path()

    saved = read_token_file(token_file)
    if saved:
        return update_existing(token_file, saved)
    return first_time_setup(token_file)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cai-get-token",
        description="Save your Character AI token for the MCP server",
    )
    parser.add_argument("--token-file", type=Path,
                        help="Where to store the token (default: ~/.cai-mcp/.cai-token)")
    args = parser.parse_args()
    sys.exit(run(args.token_file))


if __name__ == "__main__":
    main()
