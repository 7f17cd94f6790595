# volume_indexer/utils/amounts.py
"""
Utility functions for handling raw token amounts
"""

from decimal import Decimal
from typing import Union

from eth_utils import to_int

from ..types.constants import AMOUNT_CONTEXT


def amount_to_int(amount: Union[str, int, None]) -> int:
    """Convert a raw amount (int, decimal string or 0x hex string) to int"""
    if amount is None:
        return 0
    if isinstance(amount, bool):
        raise TypeError(f"Boolean is not a valid amount: {amount}")
    if isinstance(amount, int):
        return amount
    if isinstance(amount, str):
        amount = amount.strip()
        if amount == "":
            return 0
        if amount.lower().startswith("0x"):
            return to_int(hexstr=amount)
        return int(amount)
    raise TypeError(f"Unsupported amount type: {type(amount).__name__}")


def exponent_to_decimal(decimals: int) -> Decimal:
    if decimals < 0:
        raise ValueError(f"Decimal exponent must be non-negative, got {decimals}")
    return Decimal(10 ** decimals)


def amount_to_decimal(amount: Union[str, int], decimals: int) -> Decimal:
    """Scale a raw integer amount down by 10**decimals without rounding"""
    return AMOUNT_CONTEXT.divide(Decimal(amount_to_int(amount)), exponent_to_decimal(decimals))
