"""
deai-mcp CLI — run the MCP server or query the DeAI API by hand
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer

from deai_mcp import __version__
from deai_mcp.config import load_settings, set_verbose
from deai_mcp.logging_config import get_logger

HELP_TEXT = """\
DeAI MCP | Token analytics tools for AI assistants

\b
Run as an MCP server (stdio):
  deai-mcp                      Same as 'deai-mcp serve'
  deai-mcp serve
\b
Query from the terminal:
  deai-mcp tools
  deai-mcp call get_token_info -a contractAddress=0x...
  deai-mcp call get_two_token_overlap -a token1=0x... -a token2=0x...
\b
The API key is read from API_KEY (environment or ./.env).
"""

app = typer.Typer(
    name="deai-mcp",
    help=HELP_TEXT,
    invoke_without_command=True,
)


def _version_callback(value: bool):
    if value:
        print(f"deai-mcp {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Write DEBUG detail to the session log"
    ),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit",
        callback=_version_callback, is_eager=True,
    ),
):
    """Global options for all commands."""
    if verbose:
        set_verbose(True)
    if ctx.invoked_subcommand is None:
        # Bare invocation: act as an MCP server
        serve()


@app.command()
def serve():
    """Run the MCP server over stdin/stdout."""
    from deai_mcp.server import run_stdio

    logger = get_logger()
    try:
        settings = load_settings()
        asyncio.run(run_stdio(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as exc:
        logger.exception("Server failed")
        print(f"Server failed: {exc}", file=sys.stderr)
        raise typer.Exit(1)


@app.command()
def tools():
    """List the available tools."""
    from deai_mcp.skills import TOOLS

    for tool in TOOLS:
        params = ", ".join(tool["input_schema"]["required"])
        print(f"{tool['name']}({params})")
        print(f"    {tool['description']}")


def _parse_args(pairs: list[str]) -> dict:
    args = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            print(f"Invalid --arg '{pair}', expected key=value", file=sys.stderr)
            raise typer.Exit(2)
        args[key.strip()] = value.strip()
    return args


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. get_token_info"),
    arg: Optional[list[str]] = typer.Option(
        None, "--arg", "-a", help="Tool argument as key=value (repeatable)"
    ),
):
    """Call one tool and print its result."""
    from deai_mcp.skills import execute_tool

    result = execute_tool(name, _parse_args(arg or []), settings=load_settings())
    if result["status"] != "ok":
        print(f"Error ({result['kind']}): {result['error']}", file=sys.stderr)
        raise typer.Exit(1)
    print(result["display"])


def main():
    """Entry point for the CLI."""
    # Load .env from current directory (if it exists)
    from dotenv import load_dotenv
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    app()
