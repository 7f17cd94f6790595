# volume_indexer/cli/context.py

"""
CLI context: configuration plus lazily created database and services.
"""

from pathlib import Path
from typing import Optional, Union

from ..core.config import load_config
from ..core.logging import IndexerLogger, log_with_context, INFO
from ..database.connection import DatabaseManager
from ..services.pricing import StaticPriceOracle
from ..transform.swaps import SwapProcessor
from ..types.configs.config import IndexerConfig


class CLIContext:
    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 config: Optional[IndexerConfig] = None):
        self.config = config or load_config(config_path)
        self.logger = IndexerLogger.get_logger('cli.context')
        self._db_manager: Optional[DatabaseManager] = None

        log_with_context(self.logger, INFO, "CLIContext initialized",
                         config_name=self.config.name)

    @property
    def db_manager(self) -> DatabaseManager:
        if self._db_manager is None:
            self._db_manager = DatabaseManager(self.config.database)
            self._db_manager.initialize()
        return self._db_manager

    def get_swap_processor(self) -> SwapProcessor:
        return SwapProcessor(
            db_manager=self.db_manager,
            price_oracle=StaticPriceOracle.from_config(self.config.pricing),
            config=self.config.processing,
        )

    def shutdown(self) -> None:
        if self._db_manager is not None:
            self._db_manager.shutdown()
            self._db_manager = None
