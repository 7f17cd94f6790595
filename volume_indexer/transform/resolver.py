# volume_indexer/transform/resolver.py

from typing import Iterable, Optional, Tuple

from ..core.logging import LoggingMixin
from ..types.constants import ZERO_ADDRESS, METAPOOL_DX_DECIMALS
from ..types.model.errors import IndexOutOfRangeError, PoolNotFoundError, UndefinedTokenError
from ..types.model.pool import AssetType, BasePoolInfo, PoolInfo, PoolType
from ..types.model.swap import ResolvedTokens
from ..types.new import EvmAddress
from .interfaces import PoolLookup

SOLD = "sold"
BOUGHT = "bought"


class TokenResolver(LoggingMixin):
    """
    Maps the coin indices of an exchange event to token addresses and decimals.

    Three layouts are supported:
    - underlying exchange on a lending pool: indices address the virtual base
      lending pool (the wrapped coins' underlyings)
    - underlying exchange on a metapool: index 0 is the pool's own coin, index
      i > 0 is coin i - 1 of the base pool
    - anything else: indices address the pool's own coins
    """

    def __init__(self, base_pools: PoolLookup, lending_pools: PoolLookup,
                 rebasing_factory_metapools: Iterable[str] = ()):
        self.base_pools = base_pools
        self.lending_pools = lending_pools
        self.rebasing_factory_metapools = {EvmAddress(a) for a in rebasing_factory_metapools}

    def resolve(self, pool: PoolInfo, sold_id: int, bought_id: int,
                exchange_underlying: bool, tx_hash: Optional[str] = None) -> ResolvedTokens:
        token_sold, sold_decimals = self._resolve_side(
            pool, sold_id, exchange_underlying, SOLD, tx_hash
        )
        if self._forces_sold_decimals(pool, sold_id, bought_id, exchange_underlying):
            self.log_debug("Overriding sold decimals for factory metapool",
                           pool=pool.address, tx_hash=tx_hash,
                           sold_id=sold_id, bought_id=bought_id,
                           recorded_decimals=sold_decimals)
            sold_decimals = METAPOOL_DX_DECIMALS

        token_bought, bought_decimals = self._resolve_side(
            pool, bought_id, exchange_underlying, BOUGHT, tx_hash
        )

        return ResolvedTokens(
            token_sold=token_sold,
            sold_decimals=sold_decimals,
            token_bought=token_bought,
            bought_decimals=bought_decimals,
        )

    def _resolve_side(self, pool: PoolInfo, coin_id: int, exchange_underlying: bool,
                      side: str, tx_hash: Optional[str]) -> Tuple[str, int]:
        if exchange_underlying and pool.pool_type is PoolType.LENDING:
            source = self._load_base_pool(self.lending_pools, pool, "virtual_lending", tx_hash)
            index, underlying = coin_id, True
        elif exchange_underlying and coin_id != 0:
            source = self._load_base_pool(self.base_pools, pool, "base", tx_hash)
            index, underlying = coin_id - 1, True
        else:
            source = pool
            index, underlying = coin_id, False

        coin = source.coin_at(index)
        if coin is None:
            raise IndexOutOfRangeError(
                pool=pool.address, index=coin_id, side=side, tx_hash=tx_hash,
                coin_count=len(source.coins), underlying=underlying
            )

        token, decimals = coin
        if token == ZERO_ADDRESS:
            raise UndefinedTokenError(pool=pool.address, side=side, tx_hash=tx_hash)
        return token, decimals

    def _load_base_pool(self, lookup: PoolLookup, pool: PoolInfo, role: str,
                        tx_hash: Optional[str]) -> BasePoolInfo:
        if not pool.base_pool:
            raise PoolNotFoundError(pool.address, tx_hash=tx_hash, role=role)
        base_pool = lookup.get(pool.base_pool)
        if base_pool is None:
            raise PoolNotFoundError(pool.base_pool, tx_hash=tx_hash, role=role)
        return base_pool

    def _forces_sold_decimals(self, pool: PoolInfo, sold_id: int, bought_id: int,
                              exchange_underlying: bool) -> bool:
        # BTC and USD factory metapools (factory v1.2) log dx with 18 decimals
        # when selling an underlying coin for the metapool's own coin
        if not exchange_underlying or sold_id == 0:
            return False
        if pool.pool_type is not PoolType.STABLE_FACTORY:
            return False
        return (
            pool.asset_type in (AssetType.USD, AssetType.BTC)
            and bought_id == 0
            and pool.address not in self.rebasing_factory_metapools
        )
