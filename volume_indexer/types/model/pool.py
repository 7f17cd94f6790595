# volume_indexer/types/model/pool.py

import enum
from decimal import Decimal
from typing import List, Optional

from msgspec import Struct

from ..new import EvmAddress


class PoolType(enum.Enum):
    PLAIN = "PLAIN"
    LENDING = "LENDING"
    STABLE_FACTORY = "STABLE_FACTORY"
    FACTORY = "FACTORY"
    CRYPTO = "CRYPTO"


class AssetType(enum.IntEnum):
    USD = 0
    ETH = 1
    BTC = 2
    OTHER = 3
    CRYPTO = 4


class BasePoolInfo(Struct):
    """Coin layout of a base pool, or of the virtual pool behind a lending wrapper"""
    address: str
    coins: List[str]
    coin_decimals: List[int]
    is_virtual: bool = False

    def __post_init__(self) -> None:
        self.address = EvmAddress(self.address)
        self.coins = [EvmAddress(coin) for coin in self.coins]
        _check_coin_layout(self.address, self.coins, self.coin_decimals)

    def coin_at(self, index: int) -> Optional[tuple]:
        if 0 <= index < len(self.coins):
            return self.coins[index], self.coin_decimals[index]
        return None


class PoolInfo(Struct):
    address: str
    coins: List[str]
    coin_decimals: List[int]
    pool_type: PoolType = PoolType.PLAIN
    asset_type: AssetType = AssetType.USD
    is_v2: bool = False
    base_pool: Optional[str] = None
    name: Optional[str] = None
    cumulative_volume: Decimal = Decimal(0)
    cumulative_volume_usd: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        self.address = EvmAddress(self.address)
        self.coins = [EvmAddress(coin) for coin in self.coins]
        if self.base_pool:
            self.base_pool = EvmAddress(self.base_pool)
        _check_coin_layout(self.address, self.coins, self.coin_decimals)

    def coin_at(self, index: int) -> Optional[tuple]:
        if 0 <= index < len(self.coins):
            return self.coins[index], self.coin_decimals[index]
        return None


def _check_coin_layout(address: str, coins: List[str], coin_decimals: List[int]) -> None:
    if len(coins) != len(coin_decimals):
        raise ValueError(
            f"Pool {address} has {len(coins)} coins but {len(coin_decimals)} decimals"
        )
    for decimals in coin_decimals:
        if decimals < 0:
            raise ValueError(f"Pool {address} has negative coin decimals: {decimals}")
