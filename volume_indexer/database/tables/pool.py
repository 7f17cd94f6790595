# volume_indexer/database/tables/pool.py

from decimal import Decimal

from sqlalchemy import Boolean, Column, Enum, Integer, JSON, Text, Index

from ..base import DBBaseModel
from ..types import DecimalStringType, EvmAddressType
from ...types.model.pool import AssetType, BasePoolInfo, PoolInfo, PoolType


class DBPool(DBBaseModel):
    __tablename__ = 'pools'

    address = Column(EvmAddressType(), primary_key=True)
    name = Column(Text, nullable=True)
    coins = Column(JSON, nullable=False)
    coin_decimals = Column(JSON, nullable=False)
    pool_type = Column(Enum(PoolType, native_enum=False), nullable=False, default=PoolType.PLAIN)
    asset_type = Column(Integer, nullable=False, default=int(AssetType.USD))
    is_v2 = Column(Boolean, nullable=False, default=False)
    base_pool = Column(EvmAddressType(), nullable=True)

    cumulative_volume = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    cumulative_volume_usd = Column(DecimalStringType(), nullable=False, default=Decimal(0))

    __table_args__ = (
        Index('idx_pools_base_pool', 'base_pool'),
        Index('idx_pools_pool_type', 'pool_type'),
    )

    def __repr__(self) -> str:
        return f"<Pool({self.address}, type={self.pool_type.value if self.pool_type else None})>"

    def to_info(self) -> PoolInfo:
        return PoolInfo(
            address=self.address,
            coins=list(self.coins),
            coin_decimals=list(self.coin_decimals),
            pool_type=self.pool_type,
            asset_type=AssetType(self.asset_type),
            is_v2=self.is_v2,
            base_pool=self.base_pool,
            name=self.name,
            cumulative_volume=self.cumulative_volume,
            cumulative_volume_usd=self.cumulative_volume_usd,
        )

    def add_volume(self, volume: Decimal, volume_usd: Decimal) -> None:
        self.cumulative_volume = (self.cumulative_volume or Decimal(0)) + volume
        self.cumulative_volume_usd = (self.cumulative_volume_usd or Decimal(0)) + volume_usd


class DBBasePool(DBBaseModel):
    __tablename__ = 'base_pools'

    address = Column(EvmAddressType(), primary_key=True)
    is_virtual = Column(Boolean, primary_key=True, default=False)
    coins = Column(JSON, nullable=False)
    coin_decimals = Column(JSON, nullable=False)

    def __repr__(self) -> str:
        kind = "virtual lending" if self.is_virtual else "base"
        return f"<BasePool({self.address}, {kind}, coins={len(self.coins or [])})>"

    def to_info(self) -> BasePoolInfo:
        return BasePoolInfo(
            address=self.address,
            coins=list(self.coins),
            coin_decimals=list(self.coin_decimals),
            is_virtual=self.is_virtual,
        )
