# volume_indexer/__init__.py

from pathlib import Path
from typing import Dict, Optional, Union

from .core.config import load_config, configure_logging
from .core.logging import IndexerLogger, log_with_context, INFO
from .database.connection import DatabaseManager
from .services.pricing import StaticPriceOracle
from .transform.interfaces import CandleUpdater, PriceFeedUpdater, PriceOracle
from .transform.swaps import SwapProcessor, ExchangeResult, BatchStats
from .types import IndexerConfig


def create_processor(config_path: Optional[Union[str, Path]] = None,
                     env_vars: Optional[Dict[str, str]] = None,
                     price_oracle: Optional[PriceOracle] = None,
                     candle_updater: Optional[CandleUpdater] = None,
                     price_feed_updater: Optional[PriceFeedUpdater] = None,
                     config: Optional[IndexerConfig] = None) -> SwapProcessor:
    """
    Build a ready-to-use SwapProcessor.

    Loads configuration (unless given), configures logging, initializes the
    database and ensures its tables exist. Without an explicit oracle the
    configured static prices are used.
    """
    config = config or load_config(config_path, env_vars)
    configure_logging(config)

    logger = IndexerLogger.get_logger('core.init')
    log_with_context(logger, INFO, "Creating swap processor", config_name=config.name)

    db_manager = DatabaseManager(config.database)
    db_manager.initialize()
    db_manager.create_tables()

    return SwapProcessor(
        db_manager=db_manager,
        price_oracle=price_oracle or StaticPriceOracle.from_config(config.pricing),
        candle_updater=candle_updater,
        price_feed_updater=price_feed_updater,
        config=config.processing,
    )


__all__ = [
    "create_processor",
    "SwapProcessor",
    "ExchangeResult",
    "BatchStats",
    "DatabaseManager",
    "StaticPriceOracle",
    "IndexerConfig",
]
