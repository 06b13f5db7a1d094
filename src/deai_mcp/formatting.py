"""Pure display helpers for analytics payloads.

No API calls, no side effects — just number and placeholder formatting.

Conventions
-----------
- A field is *absent* when it is missing or ``None``; ``0`` is a value.
- Generic amounts use thousands separators and at most 3 fraction digits,
  trailing zeros trimmed (``1234.5`` → ``1,234.5``).
- Prices use 6 decimals, percentages and USD values 2 decimals.
- Numeric strings (token balances often arrive as strings) are formatted
  as numbers; any other string is shown unchanged.
"""

import math
from decimal import Decimal, InvalidOperation

NA = "N/A"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "Not available"

AMOUNT_DECIMALS = 3
PRICE_DECIMALS = 6
PCT_DECIMALS = 2
USD_DECIMALS = 2


def to_number(value) -> int | float | Decimal | None:
    """Return ``value`` as a finite number, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def text(value, placeholder: str = UNKNOWN) -> str:
    """Show a string-ish field, or the placeholder when absent or empty."""
    if value is None or value == "":
        return placeholder
    return str(value)


def _trim(formatted: str) -> str:
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    if formatted == "-0":
        formatted = "0"
    return formatted


def fmt_amount(value, placeholder: str = NA) -> str:
    """Format a token amount or count: ``1234567.891`` → ``1,234,567.891``."""
    if value is None:
        return placeholder
    number = to_number(value)
    if number is None:
        return value if isinstance(value, str) and value else placeholder
    if isinstance(number, int):
        return f"{number:,}"
    return _trim(f"{number:,.{AMOUNT_DECIMALS}f}")


def fmt_fixed(value, decimals: int, placeholder: str = NA) -> str:
    """Format a number with a fixed number of decimals and separators."""
    number = to_number(value)
    if number is None:
        return placeholder
    return f"{number:,.{decimals}f}"


def fmt_price(value, placeholder: str = NA) -> str:
    """Format a price with 6 decimals: ``0.5`` → ``0.500000``."""
    return fmt_fixed(value, PRICE_DECIMALS, placeholder)


def fmt_pct(value, placeholder: str = NA) -> str:
    """Format a percentage with 2 decimals (no % sign)."""
    return fmt_fixed(value, PCT_DECIMALS, placeholder)


def fmt_usd(value, placeholder: str = NA) -> str:
    """Format a USD value: ``1234.5`` → ``$1,234.50``."""
    number = to_number(value)
    if number is None:
        return placeholder
    sign = "-" if number < 0 else ""
    return f"{sign}${abs(number):,.{USD_DECIMALS}f}"


def fmt_signed(value, placeholder: str = "0") -> str:
    """Format an amount with an explicit ``+`` for positive values."""
    number = to_number(value)
    if number is None:
        return placeholder
    formatted = fmt_amount(number)
    return f"+{formatted}" if number > 0 else formatted


def pct_change(change, base) -> str:
    """Percent that ``change`` is of ``base``, 2 decimals.

    Returns "0.00" unless both are present and non-zero.
    """
    change_n = to_number(change)
    base_n = to_number(base)
    if not change_n or not base_n:
        return "0.00"
    return f"{float(change_n) / float(base_n) * 100:.2f}"


def profit_loss_pct(current_price, entry_price) -> float | None:
    """Profit/loss percent of ``current_price`` over ``entry_price``.

    Returns None when either price is absent or the entry price is zero.
    """
    current = to_number(current_price)
    entry = to_number(entry_price)
    if current is None or not entry:
        return None
    return (float(current) - float(entry)) / float(entry) * 100


def fmt_signed_pct(pct: float | None, placeholder: str = NA) -> str:
    """Format a computed percent with sign: ``12.5`` → ``+12.50%``."""
    if pct is None:
        return placeholder
    sign = "+" if pct >= 0 else ""
    return f"{sign}{pct:.2f}%"
