"""Allow ``python -m deai_mcp``."""

from deai_mcp.cli import main

main()
