# volume_indexer/services/pricing.py

from decimal import Decimal
from typing import Dict, Optional

from ..core.logging import LoggingMixin
from ..transform.interfaces import PriceOracle
from ..types.configs.config import PricingConfig
from ..types.model.pool import PoolInfo
from ..types.new import EvmAddress


class StaticPriceOracle(PriceOracle, LoggingMixin):
    """
    Fixed USD prices per token, independent of pool design and time.

    Stands in for the snapshot-backed oracle when replaying events offline.
    Tokens without a configured price fall back to `default_price`.
    """

    def __init__(self, prices: Optional[Dict[str, Decimal]] = None,
                 default_price: Decimal = Decimal(0)):
        self.prices = {EvmAddress(token): Decimal(price) for token, price in (prices or {}).items()}
        self.default_price = Decimal(default_price)

    @classmethod
    def from_config(cls, config: PricingConfig) -> "StaticPriceOracle":
        return cls(prices=config.prices, default_price=config.default_price)

    def _lookup(self, token: str, timestamp: int) -> Decimal:
        price = self.prices.get(token.lower())
        if price is None:
            self.log_debug("No configured price, using default",
                           token=token, timestamp=timestamp,
                           default_price=str(self.default_price))
            return self.default_price
        return price

    def get_stable_swap_token_price(self, pool: PoolInfo, token: str, timestamp: int) -> Decimal:
        return self._lookup(token, timestamp)

    def get_crypto_swap_token_price(self, pool: PoolInfo, token: str, timestamp: int) -> Decimal:
        return self._lookup(token, timestamp)
