# volume_indexer/transform/swaps.py

from typing import Dict, Iterable, List, Optional

from msgspec import Struct
from sqlalchemy.orm import Session

from ..core.logging import LoggingMixin
from ..database.connection import DatabaseManager
from ..types.configs.config import ProcessingConfig
from ..types.constants import AMOUNT_CONTEXT
from ..types.model.errors import PoolNotFoundError, ProcessingError, SwapResolutionError
from ..types.model.events import ExchangeEvent
from ..types.model.swap import SwapRecord, make_swap_event_id
from ..utils.amounts import amount_to_decimal
from .aggregation import SnapshotAggregator
from .interfaces import (
    CandleUpdater,
    NullCandleUpdater,
    NullPriceFeedUpdater,
    PriceFeedUpdater,
    PriceOracle,
)
from .resolver import TokenResolver


class ExchangeResult(Struct):
    event: ExchangeEvent
    swap: Optional[SwapRecord] = None
    error: Optional[ProcessingError] = None

    @property
    def ok(self) -> bool:
        return self.swap is not None


class BatchStats(Struct):
    events: int = 0
    swaps: int = 0
    skipped: Dict[str, int] = {}
    errors: List[ProcessingError] = []

    def record(self, result: ExchangeResult) -> None:
        self.events += 1
        if result.ok:
            self.swaps += 1
            return
        error_type = result.error.error_type
        self.skipped[error_type] = self.skipped.get(error_type, 0) + 1
        # Unregistered pools are routine and not worth keeping
        if error_type != PoolNotFoundError.error_type:
            self.errors.append(result.error)

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())


class SwapProcessor(LoggingMixin):
    """
    Turns exchange events into swap records, snapshots and cumulative totals.

    Each event is handled in its own transaction. Resolution failures abort
    the event before anything is written and are returned as a
    ProcessingError; other exceptions roll the event back and propagate.
    """

    def __init__(self, db_manager: DatabaseManager, price_oracle: PriceOracle,
                 candle_updater: Optional[CandleUpdater] = None,
                 price_feed_updater: Optional[PriceFeedUpdater] = None,
                 config: Optional[ProcessingConfig] = None):
        self.db_manager = db_manager
        self.price_oracle = price_oracle
        self.candle_updater = candle_updater or NullCandleUpdater()
        self.price_feed_updater = price_feed_updater or NullPriceFeedUpdater()
        self.config = config or ProcessingConfig()

        self.pool_repo = db_manager.get_pool_repo()
        self.base_pool_repo = db_manager.get_base_pool_repo()
        self.swap_repo = db_manager.get_swap_repo()
        self.aggregator = SnapshotAggregator(db_manager.get_snapshot_repo())

    def process_events(self, events: Iterable[ExchangeEvent]) -> BatchStats:
        stats = BatchStats()
        for event in events:
            stats.record(self.process_exchange(event))

        self.log_info("Exchange events processed",
                      events=stats.events, swaps=stats.swaps,
                      skipped=stats.skipped_total)
        return stats

    def process_exchange(self, event: ExchangeEvent) -> ExchangeResult:
        with self.db_manager.get_transaction() as session:
            try:
                swap = self._handle_exchange(session, event)
            except SwapResolutionError as e:
                session.rollback()
                return ExchangeResult(event=event, error=self._report(e, event))

        return ExchangeResult(event=event, swap=swap)

    def _report(self, error: SwapResolutionError, event: ExchangeEvent) -> ProcessingError:
        processing_error = error.to_processing_error()
        context = dict(
            error_type=error.error_type,
            error_id=processing_error.error_id,
            pool=event.address,
            tx_hash=event.tx_hash,
            block_number=event.block_number,
            log_index=event.log_index,
            sold_id=event.sold_id,
            bought_id=event.bought_id,
        )
        if isinstance(error, PoolNotFoundError) and error.role == "pool":
            self.log_debug(error.message, **context)
        else:
            self.log_error(error.message, **context)
        return processing_error

    def _handle_exchange(self, session: Session, event: ExchangeEvent) -> SwapRecord:
        pool = self.pool_repo.get_by_address(session, event.address)
        if pool is None:
            raise PoolNotFoundError(event.address, tx_hash=event.tx_hash)
        pool_info = pool.to_info()

        resolver = TokenResolver(
            base_pools=self.base_pool_repo.lookup(session, is_virtual=False),
            lending_pools=self.base_pool_repo.lookup(session, is_virtual=True),
            rebasing_factory_metapools=self.config.rebasing_factory_metapools,
        )
        tokens = resolver.resolve(
            pool_info, event.sold_id, event.bought_id,
            event.exchange_underlying, event.tx_hash
        )

        amount_sold = amount_to_decimal(event.tokens_sold, tokens.sold_decimals)
        amount_bought = amount_to_decimal(event.tokens_bought, tokens.bought_decimals)

        self.log_debug("Getting token prices", pool=pool_info.address, tx_hash=event.tx_hash)
        sold_price = self.price_oracle.get_token_price(pool_info, tokens.token_sold, event.timestamp)
        bought_price = self.price_oracle.get_token_price(pool_info, tokens.token_bought, event.timestamp)

        log_index = None if self.config.legacy_swap_ids else event.log_index
        record = SwapRecord(
            id=make_swap_event_id(event.tx_hash, log_index, amount_bought),
            pool=pool_info.address,
            tx_hash=event.tx_hash,
            block_number=event.block_number,
            timestamp=event.timestamp,
            buyer=event.buyer,
            gas_limit=event.gas_limit,
            gas_used=event.gas_used if event.gas_used is not None else 0,
            sold_id=event.sold_id,
            bought_id=event.bought_id,
            exchange_underlying=event.exchange_underlying,
            token_sold=tokens.token_sold,
            token_bought=tokens.token_bought,
            raw_amount_sold=event.tokens_sold,
            raw_amount_bought=event.tokens_bought,
            amount_sold=amount_sold,
            amount_bought=amount_bought,
            amount_sold_usd=AMOUNT_CONTEXT.multiply(amount_sold, sold_price),
            amount_bought_usd=AMOUNT_CONTEXT.multiply(amount_bought, bought_price),
            log_index=event.log_index,
        )
        self.swap_repo.save(session, record)

        self.candle_updater.update_candles(
            pool_info, event.timestamp,
            tokens.token_bought, amount_bought,
            tokens.token_sold, amount_sold,
            event.block_number,
        )
        self.price_feed_updater.update_price_feed(
            pool_info, tokens.token_sold, tokens.token_bought,
            amount_sold, amount_bought,
            event.sold_id, event.bought_id, event.exchange_underlying,
            event.block_number, event.timestamp,
        )

        self.aggregator.apply(session, pool, record)
        return record
