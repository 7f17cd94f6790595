"""
Interfaces for the collaborators the swap pipeline consumes.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Protocol

from ..types.model.pool import BasePoolInfo, PoolInfo


class PoolLookup(Protocol):
    """Read-only registry access keyed by address. A plain dict qualifies."""

    def get(self, address: str) -> Optional[BasePoolInfo]:
        ...


class PriceOracle(ABC):
    """USD price source for pool tokens."""

    @abstractmethod
    def get_stable_swap_token_price(self, pool: PoolInfo, token: str, timestamp: int) -> Decimal:
        """
        Price of a token held by a stableswap pool.

        Args:
            pool: Pool the token was traded in
            token: Token address
            timestamp: Block timestamp of the trade

        Returns:
            USD price per whole token
        """
        pass

    @abstractmethod
    def get_crypto_swap_token_price(self, pool: PoolInfo, token: str, timestamp: int) -> Decimal:
        """
        Price of a token held by a cryptoswap (v2) pool.

        Args:
            pool: Pool the token was traded in
            token: Token address
            timestamp: Block timestamp of the trade

        Returns:
            USD price per whole token
        """
        pass

    def get_token_price(self, pool: PoolInfo, token: str, timestamp: int) -> Decimal:
        if pool.is_v2:
            return self.get_crypto_swap_token_price(pool, token, timestamp)
        return self.get_stable_swap_token_price(pool, token, timestamp)


class CandleUpdater(ABC):
    """Receives every persisted swap for OHLC maintenance."""

    @abstractmethod
    def update_candles(self, pool: PoolInfo, timestamp: int,
                       token_bought: str, amount_bought: Decimal,
                       token_sold: str, amount_sold: Decimal,
                       block_number: int) -> None:
        pass


class PriceFeedUpdater(ABC):
    """Receives every persisted swap for price feed maintenance."""

    @abstractmethod
    def update_price_feed(self, pool: PoolInfo, token_sold: str, token_bought: str,
                          amount_sold: Decimal, amount_bought: Decimal,
                          sold_id: int, bought_id: int, exchange_underlying: bool,
                          block_number: int, timestamp: int) -> None:
        pass


class NullCandleUpdater(CandleUpdater):
    def update_candles(self, pool, timestamp, token_bought, amount_bought,
                       token_sold, amount_sold, block_number) -> None:
        return None


class NullPriceFeedUpdater(PriceFeedUpdater):
    def update_price_feed(self, pool, token_sold, token_bought, amount_sold, amount_bought,
                          sold_id, bought_id, exchange_underlying, block_number, timestamp) -> None:
        return None
