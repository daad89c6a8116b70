"""
Character AI bridge: credential resolution, the shared platform session,
and the dispatcher that turns every tool call into a uniform result.

The MCP tools in mcp_server/ are thin wrappers over this package.
"""

__version__ = "2.0.0"
