"""Exceptions raised by the Character AI bridge."""
from typing import Optional


class BridgeError(Exception):
    """Base class for bridge errors."""


class ConfigurationError(BridgeError):
    """No usable credential or configuration. Fatal at startup."""


class BindingError(BridgeError):
    """The shared session could not be bound to an entity."""


class PlatformAPIError(BridgeError):
    """A direct platform HTTP call failed (non-2xx or network error)."""

    def __init__(self, status_code: Optional[int], text: str):
        self.status_code = status_code
        self.text = text
        if status_code is None:
            super().__init__(f"API request failed: {text}")
        else:
            super().__init__(f"API {status_code}: {text}")
