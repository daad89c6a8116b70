"""MCP server exposing Character AI tools over stdio."""
