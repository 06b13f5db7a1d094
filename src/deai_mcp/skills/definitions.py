"""Tool definitions for the DeAI analytics tools.

Each tool has:
- name, description, input_schema: Standard MCP tool format
- address_fields: input properties that must be 0x-prefixed EVM addresses
- category: always "read" (no tool changes state)
"""

from deai_mcp.config import EVM_ADDRESS_PATTERN


def _address_property(description: str) -> dict:
    return {
        "type": "string",
        "description": description,
        "pattern": EVM_ADDRESS_PATTERN,
    }


_CONTRACT_ADDRESS = _address_property("Ethereum contract address (0x...)")
_WALLET_ADDRESS = _address_property("Ethereum wallet address (0x...)")


TOOLS: list[dict] = [
    {
        "name": "get_token_info",
        "description": (
            "Get detailed information about a specific token including "
            "name, symbol, decimals, logo, and fees"
        ),
        "input_schema": {
            "type": "object",
            "properties": {"contractAddress": _CONTRACT_ADDRESS},
            "required": ["contractAddress"],
        },
        "address_fields": ["contractAddress"],
        "category": "read",
    },
    {
        "name": "get_top_holders",
        "description": (
            "Get the holders of a specific token with their balances "
            "and percentages"
        ),
        "input_schema": {
            "type": "object",
            "properties": {"contractAddress": _CONTRACT_ADDRESS},
            "required": ["contractAddress"],
        },
        "address_fields": ["contractAddress"],
        "category": "read",
    },
    {
        "name": "get_token_holder_balance_changes",
        "description": (
            "Track balance changes for token holders over the last 7 days"
        ),
        "input_schema": {
            "type": "object",
            "properties": {"contractAddress": _CONTRACT_ADDRESS},
            "required": ["contractAddress"],
        },
        "address_fields": ["contractAddress"],
        "category": "read",
    },
    {
        "name": "get_portfolio",
        "description": (
            "Get comprehensive portfolio data for a wallet address including "
            "total value, changes, and token balances"
        ),
        "input_schema": {
            "type": "object",
            "properties": {"walletAddress": _WALLET_ADDRESS},
            "required": ["walletAddress"],
        },
        "address_fields": ["walletAddress"],
        "category": "read",
    },
    {
        "name": "get_avg_entry_price",
        "description": (
            "Analyze the average entry price of a token's top holders and "
            "their estimated profit or loss at the current price"
        ),
        "input_schema": {
            "type": "object",
            "properties": {"contractAddress": _CONTRACT_ADDRESS},
            "required": ["contractAddress"],
        },
        "address_fields": ["contractAddress"],
        "category": "read",
    },
    {
        "name": "get_two_token_overlap",
        "description": (
            "Find wallets that hold both of two different tokens, with "
            "overlap statistics and each shared holder's balances"
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "token1": _address_property("First token contract address (0x...)"),
                "token2": _address_property("Second token contract address (0x...)"),
            },
            "required": ["token1", "token2"],
        },
        "address_fields": ["token1", "token2"],
        "category": "read",
    },
]


def get_tools_for_mcp() -> list[dict]:
    """Return tool definitions with internal metadata stripped.

    Keys match the fields of ``mcp.types.Tool``.
    """
    return [
        {
            "name": t["name"],
            "description": t["description"],
            "inputSchema": t["input_schema"],
        }
        for t in TOOLS
    ]


def get_tool_metadata(name: str) -> dict | None:
    """Return the full tool dict (including metadata) by name.

    Returns None if the tool name is not found.
    """
    for t in TOOLS:
        if t["name"] == name:
            return t
    return None
