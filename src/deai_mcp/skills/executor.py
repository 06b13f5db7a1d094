"""Tool executor — validates tool calls and dispatches them to the API.

Each handler makes exactly one API request and formats the JSON result
for the AI agent.  Failures are raised as ToolError subclasses inside
the handlers and converted to error results here, at a single boundary.
"""

import time
from typing import Optional

from deai_mcp import formatters
from deai_mcp.api import DeAIClient
from deai_mcp.config import Settings, get_api_key, is_evm_address
from deai_mcp.errors import (
    ConfigurationError,
    ToolError,
    UnknownToolError,
    ValidationError,
)
from deai_mcp.logging_config import get_logger
from deai_mcp.skills.definitions import get_tool_metadata

MISSING_API_KEY = (
    "API_KEY environment variable is required. "
    "Set it with your DeAI API key."
)


def execute_tool(name: str, args: Optional[dict], *,
                 client: Optional[DeAIClient] = None,
                 settings: Optional[Settings] = None) -> dict:
    """Execute a tool by name with the given arguments.

    Args:
        name: Tool name.
        args: Tool arguments (None is treated as no arguments).
        client: API client to use; built from the API key when omitted.
        settings: Settings for a client built here.

    Returns:
        {"status": "ok", "tool": name, "display": text} on success,
        {"status": "error", "code": int, "kind": str, "error": message}
        on failure.
    """
    logger = get_logger()
    started = time.monotonic()
    logger.info(f"Tool call: {name}")
    logger.debug(f"Tool args: {args!r}")
    try:
        settings = settings or Settings()
        api_key = get_api_key(settings)
        if not api_key:
            raise ConfigurationError(MISSING_API_KEY)

        handler = _HANDLERS.get(name)
        if handler is None:
            raise UnknownToolError(name)

        args = validate_args(name, args)
        if client is None:
            client = DeAIClient(api_key, settings)
        display = handler(client, args)
    except ToolError as e:
        logger.warning(
            f"Tool {name} failed ({type(e).__name__}, code {e.code}): {e.message}"
        )
        return _error_result(e)
    except Exception as e:
        logger.exception(f"Tool {name} raised unexpectedly")
        return _error_result(ToolError(f"Unexpected error: {e}"))

    elapsed = time.monotonic() - started
    logger.info(f"Tool {name} ok ({elapsed:.2f}s, {len(display)} chars)")
    return {"status": "ok", "tool": name, "display": display}


def _error_result(error: ToolError) -> dict:
    return {
        "status": "error",
        "code": error.code,
        "kind": type(error).__name__,
        "error": error.message,
    }


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------

def validate_args(name: str, args: Optional[dict]) -> dict:
    """Check ``args`` against the tool's schema; return them on success.

    Every violated field is collected before raising, so the error
    message lists all of them.

    Raises:
        UnknownToolError: if ``name`` is not a registered tool.
        ValidationError: on any missing or malformed argument.
    """
    tool = get_tool_metadata(name)
    if tool is None:
        raise UnknownToolError(name)
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise ValidationError([("arguments", "Expected an object")])

    violations = []
    for field in tool["input_schema"].get("required", []):
        if args.get(field) is None:
            violations.append((field, "Required"))
    for field in tool["address_fields"]:
        value = args.get(field)
        if value is not None and not is_evm_address(value):
            violations.append((field, "Invalid Ethereum address format"))

    if name == "get_two_token_overlap" and not violations:
        if args["token1"].lower() == args["token2"].lower():
            violations.append(("token2", "Must be a different token than token1"))

    if violations:
        raise ValidationError(violations)
    return args


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _handle_get_token_info(client: DeAIClient, args: dict) -> str:
    address = args["contractAddress"]
    return formatters.format_token_info(client.get_token_info(address), address)


def _handle_get_top_holders(client: DeAIClient, args: dict) -> str:
    return formatters.format_top_holders(
        client.get_top_holders(args["contractAddress"])
    )


def _handle_get_token_holder_balance_changes(client: DeAIClient, args: dict) -> str:
    return formatters.format_balance_changes(
        client.get_token_holder_balance_changes(args["contractAddress"])
    )


def _handle_get_portfolio(client: DeAIClient, args: dict) -> str:
    address = args["walletAddress"]
    return formatters.format_portfolio(client.get_portfolio(address), address)


def _handle_get_avg_entry_price(client: DeAIClient, args: dict) -> str:
    address = args["contractAddress"]
    return formatters.format_avg_entry(client.get_avg_entry_price(address), address)


def _handle_get_two_token_overlap(client: DeAIClient, args: dict) -> str:
    token1, token2 = args["token1"], args["token2"]
    return formatters.format_two_token_overlap(
        client.get_two_token_overlap(token1, token2), token1, token2
    )


# ---------------------------------------------------------------------------
# Handler registry
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, callable] = {
    "get_token_info": _handle_get_token_info,
    "get_top_holders": _handle_get_top_holders,
    "get_token_holder_balance_changes": _handle_get_token_holder_balance_changes,
    "get_portfolio": _handle_get_portfolio,
    "get_avg_entry_price": _handle_get_avg_entry_price,
    "get_two_token_overlap": _handle_get_two_token_overlap,
}
