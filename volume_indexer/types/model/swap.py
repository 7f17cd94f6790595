# volume_indexer/types/model/swap.py

from decimal import Decimal
from typing import Optional

from msgspec import Struct

from ..constants import AMOUNT_CONTEXT, DECIMAL_TWO
from ..new import SwapEventId


class ResolvedTokens(Struct, frozen=True):
    token_sold: str
    sold_decimals: int
    token_bought: str
    bought_decimals: int


class SwapRecord(Struct):
    id: str
    pool: str
    tx_hash: str
    block_number: int
    timestamp: int
    buyer: str
    gas_limit: int
    gas_used: int
    sold_id: int
    bought_id: int
    exchange_underlying: bool
    token_sold: str
    token_bought: str
    raw_amount_sold: int
    raw_amount_bought: int
    amount_sold: Decimal
    amount_bought: Decimal
    amount_sold_usd: Decimal
    amount_bought_usd: Decimal
    log_index: Optional[int] = None

    @property
    def volume(self) -> Decimal:
        return swap_volume(self.amount_sold, self.amount_bought)

    @property
    def volume_usd(self) -> Decimal:
        return swap_volume(self.amount_sold_usd, self.amount_bought_usd)


def swap_volume(sold: Decimal, bought: Decimal) -> Decimal:
    """Both legs describe one exchange, so volume is their mean"""
    return AMOUNT_CONTEXT.divide(AMOUNT_CONTEXT.add(sold, bought), DECIMAL_TWO)


def make_swap_event_id(tx_hash: str, log_index: Optional[int], amount_bought: Decimal) -> SwapEventId:
    if log_index is not None:
        return SwapEventId(f"{tx_hash}-{log_index}")
    # Plain notation, never exponent form (1E-18)
    return SwapEventId(f"{tx_hash}-{amount_bought:f}")
