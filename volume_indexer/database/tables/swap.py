# volume_indexer/database/tables/swap.py

from sqlalchemy import BigInteger, Boolean, Column, Integer, String, Index

from ..base import DBSwapEventModel
from ..types import DecimalStringType, EvmAddressType, UintStringType
from ...types.model.swap import SwapRecord


class DBSwapEvent(DBSwapEventModel):
    __tablename__ = 'swap_events'

    id = Column(String(160), primary_key=True)
    log_index = Column(Integer, nullable=True)
    pool = Column(EvmAddressType(), nullable=False, index=True)
    buyer = Column(EvmAddressType(), nullable=False, index=True)
    gas_limit = Column(BigInteger, nullable=False, default=0)
    gas_used = Column(BigInteger, nullable=False, default=0)

    sold_id = Column(Integer, nullable=False)
    bought_id = Column(Integer, nullable=False)
    exchange_underlying = Column(Boolean, nullable=False, default=False)
    token_sold = Column(EvmAddressType(), nullable=False)
    token_bought = Column(EvmAddressType(), nullable=False)

    raw_amount_sold = Column(UintStringType(), nullable=False)
    raw_amount_bought = Column(UintStringType(), nullable=False)
    amount_sold = Column(DecimalStringType(), nullable=False)
    amount_bought = Column(DecimalStringType(), nullable=False)
    amount_sold_usd = Column(DecimalStringType(), nullable=False)
    amount_bought_usd = Column(DecimalStringType(), nullable=False)

    __table_args__ = (
        Index('idx_swap_events_pool_time', 'pool', 'timestamp'),
        Index('idx_swap_events_tx_log', 'tx_hash', 'log_index'),
    )

    def __repr__(self) -> str:
        return f"<SwapEvent(id={self.id}, pool={self.pool})>"

    @classmethod
    def from_record(cls, record: SwapRecord) -> "DBSwapEvent":
        instance = cls()
        instance.apply_record(record)
        return instance

    def apply_record(self, record: SwapRecord) -> None:
        for column in self.__table__.columns:
            if hasattr(record, column.name):
                setattr(self, column.name, getattr(record, column.name))

    def to_record(self) -> SwapRecord:
        return SwapRecord(
            id=self.id,
            pool=self.pool,
            tx_hash=self.tx_hash,
            block_number=self.block_number,
            timestamp=self.timestamp,
            buyer=self.buyer,
            gas_limit=self.gas_limit,
            gas_used=self.gas_used,
            sold_id=self.sold_id,
            bought_id=self.bought_id,
            exchange_underlying=self.exchange_underlying,
            token_sold=self.token_sold,
            token_bought=self.token_bought,
            raw_amount_sold=self.raw_amount_sold,
            raw_amount_bought=self.raw_amount_bought,
            amount_sold=self.amount_sold,
            amount_bought=self.amount_bought,
            amount_sold_usd=self.amount_sold_usd,
            amount_bought_usd=self.amount_bought_usd,
            log_index=self.log_index,
        )
