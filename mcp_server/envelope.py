"""
Envelope wrapper for MCP tool responses.

Tool functions return a ToolResult. This decorator maps it onto MCP:
success becomes a single TextContent block, failure becomes an MCP error
result carrying the error text.
"""
import inspect
from typing import Callable

from cai_bridge.dispatch import ToolResult

# Lazy import: MCP SDK is a runtime dep, not needed for tests that only
# exercise the bridge without serving tools.
_TextContent = None
_ToolError = None


def _get_text_content_class():
    """Lazy-load mcp.types.TextContent."""
    global _TextContent
    if _TextContent is None:
        from mcp.types import TextContent
        _TextContent = TextContent
    return _TextContent


def _get_tool_error_class():
    """Lazy-load FastMCP's ToolError (reported to the caller with isError=True)."""
    global _ToolError
    if _ToolError is None:
        from mcp.server.fastmcp.exceptions import ToolError
        _ToolError = ToolError
    return _ToolError


def tool_envelope(func: Callable) -> Callable:
    """
    Decorator that converts a ToolResult into an MCP response.

    Usage:
        @mcp.tool()
        @tool_envelope
        async def my_tool(arg1: str) -> ToolResult:
            return await dispatcher.call("Label", lambda c: c.thing(arg1))
    """
    # Build wrapper with the ORIGINAL function's signature (minus return type)
    # so the SDK derives the parameter schema but no output schema.
    # We can't use @wraps because inspect.signature() follows __wrapped__
    # back to the original function which still has -> ToolResult.
    sig = inspect.signature(func)
    new_sig = sig.replace(return_annotation=inspect.Parameter.empty)

    async def wrapper(*args, **kwargs):
        result = await func(*args, **kwargs)
        if not isinstance(result, ToolResult):
            raise TypeError(f"{func.__name__} returned {type(result).__name__}, expected ToolResult")

        if not result.success:
            raise _get_tool_error_class()(result.text)

        TC = _get_text_content_class()
        return [TC(type="text", text=result.text)]

    # Preserve function identity for MCP registration
    wrapper.__name__ = func.__name__
    wrapper.__qualname__ = func.__qualname__
    wrapper.__doc__ = func.__doc__
    wrapper.__module__ = func.__module__
    wrapper.__annotations__ = {
        k: v for k, v in func.__annotations__.items() if k != 'return'
    }
    wrapper.__signature__ = new_sig

    return wrapper
