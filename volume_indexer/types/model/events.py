# volume_indexer/types/model/events.py

from typing import Optional, Union

from msgspec import Struct

from ..new import EvmAddress, EvmHash
from ...utils.amounts import amount_to_int


class ExchangeEvent(Struct):
    """Decoded TokenExchange / TokenExchangeUnderlying log"""
    buyer: str
    sold_id: Union[int, str]
    bought_id: Union[int, str]
    tokens_sold: Union[int, str]
    tokens_bought: Union[int, str]
    timestamp: Union[int, str]
    block_number: Union[int, str]
    address: str
    tx_hash: str
    gas_limit: Union[int, str] = 0
    gas_used: Optional[Union[int, str]] = None
    exchange_underlying: bool = False
    log_index: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        # Values straight off an RPC node arrive hex encoded
        self.buyer = EvmAddress(self.buyer)
        self.address = EvmAddress(self.address)
        self.tx_hash = EvmHash(self.tx_hash)
        self.sold_id = amount_to_int(self.sold_id)
        self.bought_id = amount_to_int(self.bought_id)
        self.tokens_sold = amount_to_int(self.tokens_sold)
        self.tokens_bought = amount_to_int(self.tokens_bought)
        self.timestamp = amount_to_int(self.timestamp)
        self.block_number = amount_to_int(self.block_number)
        self.gas_limit = amount_to_int(self.gas_limit)
        if self.gas_used is not None:
            self.gas_used = amount_to_int(self.gas_used)
        if self.log_index is not None:
            self.log_index = amount_to_int(self.log_index)
