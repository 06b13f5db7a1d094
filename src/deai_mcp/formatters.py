"""Formatters — turn DeAI API payloads into text for the AI agent.

One function per tool.  Each takes the decoded JSON returned by its
endpoint and returns a multi-line string.  Fields are read with
``dict.get`` and replaced by a placeholder when absent; only the
top-level containers a formatter cannot work without are checked, and
a wrong shape there raises ResponseShapeError.
"""

from deai_mcp.config import MAX_LIST_ITEMS
from deai_mcp.errors import ResponseShapeError
from deai_mcp.formatting import (
    NA,
    NOT_AVAILABLE,
    UNKNOWN,
    fmt_amount,
    fmt_pct,
    fmt_price,
    fmt_signed,
    fmt_signed_pct,
    fmt_usd,
    pct_change,
    profit_loss_pct,
    text,
    to_number,
)


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------

def _require_object(data) -> dict:
    if not isinstance(data, dict):
        raise ResponseShapeError()
    return data


def _require_list(data: dict, key: str) -> list[dict]:
    """Return ``data[key]`` as a list of dicts (non-dict items become {})."""
    items = data.get(key)
    if not isinstance(items, list):
        raise ResponseShapeError()
    return [item if isinstance(item, dict) else {} for item in items]


def _require_dict(data: dict, key: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ResponseShapeError()
    return value


def _address_line(index: int, entry: dict) -> str:
    label = entry.get("label")
    suffix = f" ({label})" if label else ""
    return f"{index}. {text(entry.get('address'))}{suffix}"


def _pct_or_na(value) -> str:
    formatted = fmt_pct(value)
    return f"{formatted}%" if formatted != NA else NA


# ---------------------------------------------------------------------------
# Token info
# ---------------------------------------------------------------------------

def format_token_info(data, address: str) -> str:
    """Name, symbol, decimals, logo and trading fees of a token."""
    data = _require_object(data)

    def _fee(key: str) -> str:
        fee = data.get(key)
        return f"{fee}%" if fee is not None else NOT_AVAILABLE

    decimals = data.get("decimals")
    lines = [
        f"Token Information for {address}:",
        "",
        f"**{text(data.get('name'))} ({text(data.get('symbol'))})**",
        f"• Address: {text(data.get('address'), address)}",
        f"• Decimals: {decimals if decimals is not None else UNKNOWN}",
        f"• Logo: {text(data.get('logoUrl'), NOT_AVAILABLE)}",
        f"• Buy Fee: {_fee('buyFee')}",
        f"• Sell Fee: {_fee('sellFee')}",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Top holders
# ---------------------------------------------------------------------------

def format_top_holders(data) -> str:
    """Supply, holder count and the first holders in API order."""
    data = _require_object(data)
    holders = _require_list(data, "holders")

    lines = [
        f"Top Holders for {text(data.get('tokenName'))} "
        f"({text(data.get('tokenSymbol'))}):",
        "",
        "**Token Statistics:**",
        f"• Total Supply: {fmt_amount(data.get('totalSupply'))}",
        f"• Total Holders: {fmt_amount(data.get('holdersCount'))}",
        "",
        f"**Top {MAX_LIST_ITEMS} Holders:**",
    ]
    if not holders:
        lines.append("No holders found.")
    for i, holder in enumerate(holders[:MAX_LIST_ITEMS], 1):
        lines.append(_address_line(i, holder))
        lines.append(
            f"   Balance: {fmt_amount(holder.get('balance'))} "
            f"({_pct_or_na(holder.get('percentage'))})"
        )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Holder balance changes
# ---------------------------------------------------------------------------

def format_balance_changes(data) -> str:
    """Per-holder balance change over the last 7 days."""
    data = _require_object(data)
    changes = _require_list(data, "tokenHolderBalanceChanges")

    lines = [
        "Token Holders Balance Changes (Last 7 Days):",
        f"**Token:** {text(data.get('tokenAddress'))}",
        "",
        f"**Top {MAX_LIST_ITEMS} Balance Changes:**",
    ]
    if not changes:
        lines.append("No balance changes found.")
    for i, change in enumerate(changes[:MAX_LIST_ITEMS], 1):
        start = change.get("balanceStart")
        lines.append(_address_line(i, change))
        lines.append(
            f"   Change: {fmt_signed(change.get('change'))} "
            f"({pct_change(change.get('change'), start)}%)"
        )
        lines.append(
            f"   Start: {fmt_amount(start)} → "
            f"End: {fmt_amount(change.get('balanceEnd'))}"
        )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------

def _usd_value(balance: dict) -> float:
    value = to_number(balance.get("valueUSD"))
    return float(value) if value is not None else 0.0


def format_portfolio(data, address: str) -> str:
    """Total value, 24h change and the largest holdings by USD value."""
    data = _require_object(data)
    balances = _require_list(data, "tokenBalances")
    # Sorted before truncation
    ranked = sorted(balances, key=_usd_value, reverse=True)[:MAX_LIST_ITEMS]

    lines = [
        f"Portfolio Summary for {address}:",
        "",
        "**Overall Portfolio:**",
        f"• Total Value: {fmt_usd(data.get('totalPortfolioValue'))}",
        f"• 24h Change: {fmt_usd(data.get('totalPortfolioValueChange'))} "
        f"({_pct_or_na(data.get('totalPortfolioValueChangePercentage'))})",
        "",
        f"**Top {MAX_LIST_ITEMS} Token Holdings:**",
    ]
    if not ranked:
        lines.append("No token balances found.")
    for i, balance in enumerate(ranked, 1):
        token = balance.get("token")
        token = token if isinstance(token, dict) else {}
        lines.append(f"{i}. {text(token.get('name'))} ({text(token.get('symbol'))})")
        lines.append(f"   Amount: {fmt_amount(balance.get('amount'))}")
        lines.append(f"   Value: {fmt_usd(balance.get('valueUSD'))}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Average entry price
# ---------------------------------------------------------------------------

def format_avg_entry(data, address: str) -> str:
    """Average entry price per holder and the resulting profit/loss."""
    data = _require_object(data)
    holders = _require_list(data, "holders")
    current_price = data.get("currentPrice")

    lines = [
        f"Average Entry Price Analysis for {text(data.get('tokenName'))} "
        f"({text(data.get('tokenSymbol'))}):",
        f"**Token:** {text(data.get('tokenAddress'), address)}",
        "",
        "**Summary:**",
        f"• Current Price: {fmt_price(current_price)}",
        f"• Average Entry Price: {fmt_price(data.get('averageEntryPrice'))}",
        f"• Overall P/L: "
        f"{fmt_signed_pct(profit_loss_pct(current_price, data.get('averageEntryPrice')))}",
        f"• Holders Analyzed: {fmt_amount(data.get('holdersAnalyzed', len(holders)))}",
        "",
        f"**Top {MAX_LIST_ITEMS} Holders by Entry:**",
    ]
    if not holders:
        lines.append("No holder entry data found.")
    for i, holder in enumerate(holders[:MAX_LIST_ITEMS], 1):
        entry_price = holder.get("avgEntryPrice")
        price = holder.get("currentPrice")
        if price is None:
            price = current_price
        lines.append(_address_line(i, holder))
        lines.append(f"   Balance: {fmt_amount(holder.get('balance'))}")
        lines.append(f"   Avg Entry: {fmt_price(entry_price)}")
        lines.append(f"   P/L: {fmt_signed_pct(profit_loss_pct(price, entry_price))}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Two-token holder overlap
# ---------------------------------------------------------------------------

def _token_summary(label: str, token: dict, fallback_address: str) -> list[str]:
    return [
        f"**{label}:** {text(token.get('name'))} ({text(token.get('symbol'))})",
        f"• Address: {text(token.get('address'), fallback_address)}",
        f"• Holders: {fmt_amount(token.get('holdersCount'))}",
    ]


def format_two_token_overlap(data, token1: str, token2: str) -> str:
    """Addresses holding both tokens, with their balance of each."""
    data = _require_object(data)
    first = _require_dict(data, "token1")
    second = _require_dict(data, "token2")
    overlaps = _require_list(data, "overlappingHolders")

    count = data.get("overlapCount")
    if count is None:
        count = len(overlaps)

    lines = [
        "Holder Overlap Between Tokens:",
        "",
        *_token_summary("Token 1", first, token1),
        *_token_summary("Token 2", second, token2),
        "",
        "**Overlap:**",
        f"• Shared Holders: {fmt_amount(count)}",
        f"• Overlap Percentage: {_pct_or_na(data.get('overlapPercentage'))}",
        "",
        f"**Top {MAX_LIST_ITEMS} Shared Holders:**",
    ]
    if not overlaps:
        lines.append("No shared holders found.")
    for i, holder in enumerate(overlaps[:MAX_LIST_ITEMS], 1):
        lines.append(_address_line(i, holder))
        lines.append(
            f"   Token 1 Balance: {fmt_amount(holder.get('token1Balance'))} | "
            f"Token 2 Balance: {fmt_amount(holder.get('token2Balance'))}"
        )
    return "\n".join(lines)
