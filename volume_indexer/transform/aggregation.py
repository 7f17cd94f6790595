# volume_indexer/transform/aggregation.py

from decimal import Decimal, localcontext
from typing import Dict, Iterable

from sqlalchemy.orm import Session

from ..core.logging import LoggingMixin
from ..database.repositories.snapshot_repository import SwapSnapshotRepository
from ..database.tables.pool import DBPool
from ..database.tables.snapshot import DBSwapSnapshot
from ..database.types import SnapshotPeriod
from ..types.constants import AMOUNT_CONTEXT
from ..types.model.swap import SwapRecord


class SnapshotAggregator(LoggingMixin):
    """Folds swap records into period snapshots and pool cumulative totals"""

    def __init__(self, snapshot_repo: SwapSnapshotRepository,
                 periods: Iterable[SnapshotPeriod] = tuple(SnapshotPeriod)):
        self.snapshot_repo = snapshot_repo
        self.periods = tuple(periods)

    def apply(self, session: Session, pool: DBPool, swap: SwapRecord) -> Dict[SnapshotPeriod, DBSwapSnapshot]:
        volume = swap.volume
        volume_usd = swap.volume_usd

        # Running sums must not be rounded to the default 28 digits
        with localcontext(AMOUNT_CONTEXT):
            snapshots = {
                period: self._add_to_snapshot(session, period, swap, volume, volume_usd)
                for period in self.periods
            }
            pool.add_volume(volume, volume_usd)

        self.log_debug("Swap aggregated",
                       pool=swap.pool, tx_hash=swap.tx_hash,
                       volume=str(volume), volume_usd=str(volume_usd))
        return snapshots

    def _add_to_snapshot(self, session: Session, period: SnapshotPeriod, swap: SwapRecord,
                         volume: Decimal, volume_usd: Decimal) -> DBSwapSnapshot:
        snapshot = self.snapshot_repo.get_or_create(session, swap.pool, period, swap.timestamp)
        snapshot.count += 1
        snapshot.amount_sold += swap.amount_sold
        snapshot.amount_bought += swap.amount_bought
        snapshot.amount_sold_usd += swap.amount_sold_usd
        snapshot.amount_bought_usd += swap.amount_bought_usd
        snapshot.volume += volume
        snapshot.volume_usd += volume_usd
        return snapshot
