"""Agent skills — tool definitions and executor for deai-mcp."""

from deai_mcp.skills.definitions import (
    TOOLS,
    get_tool_metadata,
    get_tools_for_mcp,
)
from deai_mcp.skills.executor import execute_tool, validate_args

__all__ = [
    "TOOLS",
    "execute_tool",
    "get_tool_metadata",
    "get_tools_for_mcp",
    "validate_args",
]
