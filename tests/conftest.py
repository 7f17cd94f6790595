# tests/conftest.py

from decimal import Decimal

import pytest

from volume_indexer.core.logging import IndexerLogger
from volume_indexer.database.connection import DatabaseManager
from volume_indexer.services.pricing import StaticPriceOracle
from volume_indexer.transform.swaps import SwapProcessor
from volume_indexer.types import DatabaseConfig, ProcessingConfig

from pool_fixtures import (
    DAI, MUSD, TOKEN_A, TOKEN_B, USDC, USDT,
    RecordingCandleUpdater,
    RecordingPriceFeedUpdater,
    all_base_pools,
    all_pools,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    IndexerLogger.reset()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'volume.db'}"


@pytest.fixture
def db_manager(db_url):
    manager = DatabaseManager(DatabaseConfig(url=db_url))
    manager.initialize()
    manager.create_tables()
    yield manager
    manager.shutdown()


@pytest.fixture
def registry(db_manager):
    with db_manager.get_transaction() as session:
        for base_pool in all_base_pools():
            db_manager.get_base_pool_repo().upsert(session, base_pool)
        for pool in all_pools():
            db_manager.get_pool_repo().upsert(session, pool)
    return db_manager


@pytest.fixture
def oracle():
    one = Decimal(1)
    return StaticPriceOracle(prices={
        TOKEN_A: one, TOKEN_B: one, DAI: one, USDC: one, USDT: one, MUSD: one,
    })


@pytest.fixture
def journal():
    return []


@pytest.fixture
def make_processor(registry, oracle, journal):
    def _make(price_oracle=None, **config):
        return SwapProcessor(
            db_manager=registry,
            price_oracle=price_oracle or oracle,
            candle_updater=RecordingCandleUpdater(journal),
            price_feed_updater=RecordingPriceFeedUpdater(journal),
            config=ProcessingConfig(**config),
        )
    return _make


@pytest.fixture
def processor(make_processor):
    return make_processor()
