"""
Monetary precision: conversion between currency amounts and integer cents.

All bid arithmetic runs on integer minor units (cents). Amounts are only
turned back into Decimal for display.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Amount = Union[int, float, str, Decimal]

CENTS_PER_UNIT = 100

_ONE = Decimal(1)


def _as_decimal(amount: Amount) -> Decimal:
    """Convert a supported amount type to Decimal without binary float noise"""
    if isinstance(amount, bool):
        raise TypeError(f"Unsupported amount type: {type(amount)}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, float):
        # repr() gives the shortest string that round-trips, so 10.01 -> "10.01"
        value = Decimal(repr(amount))
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(amount)
        except InvalidOperation:
            raise ValueError(f"Amount is not a number: {amount!r}") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(amount)}")

    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")
    return value


def to_minor_units(amount: Amount) -> int:
    """
    Convert a currency amount to integer cents.

    Rounds to the nearest cent with ties away from zero, so 0.005 -> 1,
    0.004 -> 0 and -0.005 -> -1.

    Args:
        amount: Amount in currency units (int, float, str or Decimal)

    Returns:
        Amount in cents
    """
    scaled = _as_decimal(amount) * CENTS_PER_UNIT
    return int(scaled.quantize(_ONE, rounding=ROUND_HALF_UP))


def to_decimal(minor_units: int) -> Decimal:
    """Convert cents back to currency units (exact, no rounding)"""
    return Decimal(minor_units).scaleb(-2)


def format_amount(minor_units: int) -> str:
    """Render cents as a two-decimal string, e.g. 7250 -> '72.50'"""
    return f"{to_decimal(minor_units):.2f}"
