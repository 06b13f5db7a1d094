"""Error taxonomy for deai-mcp tool calls.

Each error carries the MCP JSON-RPC code it is reported under.  Helpers
raise these; ``execute_tool`` catches them once and turns them into
``{"status": "error", ...}`` results.
"""

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
)


class ToolError(Exception):
    """Base class for failures reported back to the host."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ToolError):
    """The API key is not configured."""

    code = INVALID_REQUEST


class ValidationError(ToolError):
    """One or more tool arguments are missing or malformed."""

    code = INVALID_PARAMS

    def __init__(self, violations: list[tuple[str, str]]):
        self.violations = list(violations)
        details = ", ".join(f"{field}: {reason}" for field, reason in self.violations)
        super().__init__(f"Invalid parameters: {details}")


class UnknownToolError(ToolError):
    """No tool is registered under the requested name."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Tool "{name}" not found')


class UpstreamError(ToolError):
    """The analytics API failed, timed out, or was unreachable."""

    code = INTERNAL_ERROR

    def __init__(self, message: str, *, status_code: int | None = None,
                 is_timeout: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.is_timeout = is_timeout


class ResponseShapeError(ToolError):
    """A 2xx response did not have the structure a formatter needs."""

    code = INTERNAL_ERROR

    def __init__(self, message: str = "Invalid response format from API"):
        super().__init__(message)
