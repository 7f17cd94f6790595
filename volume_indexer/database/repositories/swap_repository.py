# volume_indexer/database/repositories/swap_repository.py

from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy import desc

from ..tables.swap import DBSwapEvent
from ...core.logging import log_with_context, DEBUG, ERROR, WARNING
from ...types.model.swap import SwapRecord
from .base_repository import BaseRepository


class SwapEventRepository(BaseRepository[DBSwapEvent]):
    """Repository for normalized swap records"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBSwapEvent)

    def save(self, session: Session, record: SwapRecord) -> DBSwapEvent:
        """Insert the record, replacing any earlier record with the same id"""
        try:
            existing = self.get(session, record.id)
            if existing is not None:
                log_with_context(self.logger, WARNING, "Swap id collision, overwriting record",
                                 swap_id=record.id, tx_hash=record.tx_hash, pool=record.pool)
                existing.apply_record(record)
                session.flush()
                return existing

            swap = DBSwapEvent.from_record(record)
            session.add(swap)
            session.flush()

            log_with_context(self.logger, DEBUG, "Swap event saved",
                             swap_id=record.id, tx_hash=record.tx_hash, pool=record.pool)
            return swap

        except Exception as e:
            log_with_context(self.logger, ERROR, "Error saving swap event",
                             swap_id=record.id, tx_hash=record.tx_hash, error=str(e))
            raise

    def get_by_pool(self, session: Session, pool: str, limit: int = 100) -> List[DBSwapEvent]:
        """Most recent swaps of a pool first"""
        try:
            return session.query(DBSwapEvent).filter(
                DBSwapEvent.pool == pool.lower()
            ).order_by(
                desc(DBSwapEvent.block_number), desc(DBSwapEvent.timestamp)
            ).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting swaps by pool",
                             pool=pool, error=str(e))
            raise

    def get_by_tx_hash(self, session: Session, tx_hash: str) -> List[DBSwapEvent]:
        try:
            return session.query(DBSwapEvent).filter(
                DBSwapEvent.tx_hash == tx_hash.lower()
            ).order_by(DBSwapEvent.log_index).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting swaps by tx_hash",
                             tx_hash=tx_hash, error=str(e))
            raise

    def count_by_pool(self, session: Session, pool: str) -> int:
        return session.query(DBSwapEvent).filter(DBSwapEvent.pool == pool.lower()).count()

    def get_record(self, session: Session, swap_id: str) -> Optional[SwapRecord]:
        swap = self.get(session, swap_id)
        return swap.to_record() if swap else None
