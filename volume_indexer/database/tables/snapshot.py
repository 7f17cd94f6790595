# volume_indexer/database/tables/snapshot.py

from decimal import Decimal

from sqlalchemy import BigInteger, Column, Enum, Integer, Index

from ..base import DBBaseModel
from ..types import DecimalStringType, EvmAddressType, SnapshotPeriod


class DBSwapSnapshot(DBBaseModel):
    """
    Swap aggregates of one pool over one hour, day or week.

    The bucket index is floor(timestamp / period seconds); `timestamp` holds
    the bucket's opening time for convenience.
    """
    __tablename__ = 'swap_snapshots'

    pool = Column(EvmAddressType(), primary_key=True)
    period = Column(Enum(SnapshotPeriod, native_enum=False), primary_key=True)
    bucket = Column(BigInteger, primary_key=True)
    timestamp = Column(BigInteger, nullable=False)

    count = Column(Integer, nullable=False, default=0)
    amount_sold = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    amount_bought = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    amount_sold_usd = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    amount_bought_usd = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    volume = Column(DecimalStringType(), nullable=False, default=Decimal(0))
    volume_usd = Column(DecimalStringType(), nullable=False, default=Decimal(0))

    __table_args__ = (
        Index('idx_swap_snapshots_period_time', 'period', 'timestamp'),
    )

    def __repr__(self) -> str:
        return f"<SwapSnapshot({self.pool}, {self.period.value}, bucket={self.bucket}, count={self.count})>"
