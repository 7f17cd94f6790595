# volume_indexer/database/repositories/snapshot_repository.py

from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy import desc

from ..tables.snapshot import DBSwapSnapshot
from ..types import SnapshotPeriod
from ...core.logging import log_with_context, DEBUG, ERROR
from .base_repository import BaseRepository

ZERO = Decimal(0)


class SwapSnapshotRepository(BaseRepository[DBSwapSnapshot]):
    """Hourly, daily and weekly swap aggregates per pool"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBSwapSnapshot)

    def get_snapshot(self, session: Session, pool: str, period: SnapshotPeriod,
                     timestamp: int) -> Optional[DBSwapSnapshot]:
        return self.get(session, (pool.lower(), period, period.bucket(timestamp)))

    def get_or_create(self, session: Session, pool: str, period: SnapshotPeriod,
                      timestamp: int) -> DBSwapSnapshot:
        try:
            snapshot = self.get_snapshot(session, pool, period, timestamp)
            if snapshot is not None:
                return snapshot

            snapshot = DBSwapSnapshot(
                pool=pool.lower(),
                period=period,
                bucket=period.bucket(timestamp),
                timestamp=period.bucket_start(timestamp),
                count=0,
                amount_sold=ZERO,
                amount_bought=ZERO,
                amount_sold_usd=ZERO,
                amount_bought_usd=ZERO,
                volume=ZERO,
                volume_usd=ZERO,
            )
            session.add(snapshot)
            session.flush()

            log_with_context(self.logger, DEBUG, "Snapshot created",
                             pool=pool, period=period.value, bucket=snapshot.bucket)
            return snapshot

        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting or creating snapshot",
                             pool=pool, period=period.value, error=str(e))
            raise

    def get_range(self, session: Session, pool: str, period: SnapshotPeriod,
                  start_time: Optional[int] = None, end_time: Optional[int] = None) -> List[DBSwapSnapshot]:
        """Snapshots whose buckets overlap [start_time, end_time], oldest first"""
        try:
            query = session.query(DBSwapSnapshot).filter(
                DBSwapSnapshot.pool == pool.lower(),
                DBSwapSnapshot.period == period,
            )
            if start_time is not None:
                query = query.filter(DBSwapSnapshot.bucket >= period.bucket(start_time))
            if end_time is not None:
                query = query.filter(DBSwapSnapshot.bucket <= period.bucket(end_time))
            return query.order_by(DBSwapSnapshot.bucket).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting snapshot range",
                             pool=pool, period=period.value, error=str(e))
            raise

    def get_latest(self, session: Session, pool: str, period: SnapshotPeriod,
                   limit: int = 24) -> List[DBSwapSnapshot]:
        try:
            return session.query(DBSwapSnapshot).filter(
                DBSwapSnapshot.pool == pool.lower(),
                DBSwapSnapshot.period == period,
            ).order_by(desc(DBSwapSnapshot.bucket)).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting latest snapshots",
                             pool=pool, period=period.value, error=str(e))
            raise
