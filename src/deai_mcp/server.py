"""DeAI analytics — MCP server.

Exposes the six read-only tools from ``deai_mcp.skills`` over the Model
Context Protocol.  Tool calls run the synchronous executor in a worker
thread.  Failures are raised as McpError from a raw ``tools/call``
request handler, so the host receives a JSON-RPC error carrying the
executor's error code rather than a text result.
"""

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from deai_mcp import __version__
from deai_mcp.config import Settings, load_settings
from deai_mcp.logging_config import get_logger
from deai_mcp.skills import execute_tool, get_tools_for_mcp

SERVER_NAME = "deai-api-server"

server = Server(SERVER_NAME, version=__version__)

# Replaced by run_stdio() with the settings loaded at startup
_settings: Settings = Settings()


@server.list_tools()
async def list_tools() -> list[types.Tool]:
    """Return all available analytics tools."""
    return [types.Tool(**tool) for tool in get_tools_for_mcp()]


async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
    """Execute an analytics tool and return its text result.

    Raises:
        McpError: with the executor's error code (InvalidRequest,
            MethodNotFound, InvalidParams or InternalError).
    """
    result = await anyio.to_thread.run_sync(
        lambda: execute_tool(name, arguments, settings=_settings)
    )
    if result["status"] != "ok":
        raise McpError(
            types.ErrorData(code=result["code"], message=result["error"])
        )
    return [types.TextContent(type="text", text=result["display"])]


# Registered directly: the call_tool() decorator would turn McpError into an
# isError text result and drop the code.  Argument checks stay in the
# executor, after the API key check.
async def _handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
    content = await call_tool(req.params.name, req.params.arguments)
    return types.ServerResult(types.CallToolResult(content=content))


server.request_handlers[types.CallToolRequest] = _handle_call_tool


async def run_stdio(settings: Settings | None = None) -> None:
    """Serve over stdin/stdout until the host disconnects."""
    global _settings
    _settings = settings or load_settings()
    logger = get_logger()
    logger.info(
        f"Starting {SERVER_NAME} {__version__} "
        f"(base_url={_settings.base_url}, timeout={_settings.timeout}s)"
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
    logger.info(f"{SERVER_NAME} stopped")
