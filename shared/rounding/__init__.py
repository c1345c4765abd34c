"""
Money Rounding

Round-half-up at a configurable number of decimals. Works on the decimal
representation of the value, so 1.005 rounds to 1.01 rather than 1.0.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

import polars as pl


DEFAULT_DECIMALS = 2


def round_half_up(value, decimals: int | None = None, default_decimals: int = DEFAULT_DECIMALS) -> float:
    """
    Round a number half-up.

    Args:
        value: Number (or numeric string) to round. Non-numeric values round to 0.0
        decimals: Decimal places. None or anything below 1 uses default_decimals
        default_decimals: Fallback decimal places

    Returns:
        Rounded float
    """
    if decimals is None or decimals < 1:
        decimals = default_decimals

    try:
        quantum = Decimal(1).scaleb(-decimals)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return 0.0

    if not rounded.is_finite():
        return 0.0
    return float(rounded)


def round_half_up_expr(col: str | pl.Expr, decimals: int | None = None) -> pl.Expr:
    """Polars expression applying round_half_up to every value of a column."""
    expr = pl.col(col) if isinstance(col, str) else col
    return expr.map_elements(
        lambda v: round_half_up(v, decimals),
        return_dtype=pl.Float64,
    )


__all__ = [
    "DEFAULT_DECIMALS",
    "round_half_up",
    "round_half_up_expr",
]
