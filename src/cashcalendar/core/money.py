"""
Monetary precision and display helpers for CashCalendar.

Amounts are carried as `Decimal` so running balances add up exactly. There is
a single display currency; only the symbol is configurable.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

ZERO = Decimal("0")


class RoundingPolicy(Enum):
    """Rounding policies for money quantization."""

    BANKERS = ROUND_HALF_EVEN
    HALF_UP = ROUND_HALF_UP


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """
    Convert a numeric value to `Decimal`.

    Floats go through `str()` so `0.1` becomes `Decimal("0.1")` rather than
    its binary expansion. Booleans are rejected even though they are ints.

    Raises:
        ValueError: If the value is not numeric or not finite
    """
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"expected a number, got {value!r}") from exc
    else:
        raise ValueError(f"expected a number, got {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"expected a finite number, got {value!r}")
    return result


def quantize(
    amount: Decimal,
    decimals: int = 2,
    rounding: RoundingPolicy = RoundingPolicy.BANKERS,
) -> Decimal:
    """Quantize amount to the given number of decimal places."""
    quantum = Decimal("1").scaleb(-decimals)  # e.g., 0.01 for 2 dp
    return amount.quantize(quantum, rounding=rounding.value)


def format_money(value: Decimal | float | int, symbol: str = "£") -> str:
    """
    Render an amount with thousands separators and a currency symbol.

    Whole amounts are shown without decimals, anything else with two.
    Negative amounts put the sign before the symbol.

    **Example:**
        ```python
        format_money(Decimal("1200"))     # '£1,200'
        format_money(Decimal("-45.5"))    # '-£45.50'
        ```
    """
    amount = to_decimal(value)
    magnitude = quantize(abs(amount), rounding=RoundingPolicy.HALF_UP)
    sign = "-" if amount < 0 and magnitude else ""
    if magnitude == magnitude.to_integral_value():
        body = f"{int(magnitude):,}"
    else:
        body = f"{magnitude:,.2f}"
    return f"{sign}{symbol}{body}"
