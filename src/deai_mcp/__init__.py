"""deai-mcp — MCP tools for the DeAI blockchain analytics API."""

__version__ = "1.0.0"
