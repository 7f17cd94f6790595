# tests/test_swaps.py

import logging
from decimal import Decimal

from msgspec import structs
import pytest

from volume_indexer.database.types import SnapshotPeriod
from volume_indexer.services.pricing import StaticPriceOracle

from pool_fixtures import (
    BUYER, CRYPTO_POOL, DAI, LENDING_POOL, META_POOL, PLAIN_POOL, TOKEN_A, TOKEN_B, TS, BLOCK,
    UNDEFINED_POOL, UNKNOWN_POOL, USDC,
    RecordingOracle,
    addr,
    make_event,
    tx,
)


def swap_count(db_manager, pool=None):
    with db_manager.get_session() as session:
        if pool:
            return db_manager.get_swap_repo().count_by_pool(session, pool)
        return db_manager.get_swap_repo().count(session)


def snapshot_count(db_manager):
    with db_manager.get_session() as session:
        return db_manager.get_snapshot_repo().count(session)


def pool_totals(db_manager, address):
    with db_manager.get_session() as session:
        pool = db_manager.get_pool_repo().get_by_address(session, address)
        return pool.cumulative_volume, pool.cumulative_volume_usd


def snapshots(db_manager, pool, period):
    with db_manager.get_session() as session:
        return db_manager.get_snapshot_repo().get_range(session, pool, period)


class TestPlainPoolSwap:
    def test_one_to_one_swap(self, processor, registry):
        result = processor.process_exchange(make_event(log_index=3))

        assert result.ok
        swap = result.swap
        assert swap.id == f"{tx(1)}-3"
        assert swap.token_sold == TOKEN_A
        assert swap.token_bought == TOKEN_B
        assert swap.amount_sold == Decimal(1)
        assert swap.amount_bought == Decimal(1)
        assert swap.volume == Decimal(1)
        assert swap.volume_usd == Decimal(1)

        with registry.get_session() as session:
            stored = registry.get_swap_repo().get_record(session, swap.id)
        assert stored.amount_sold == Decimal(1)
        assert stored.raw_amount_bought == 10 ** 18
        assert stored.buyer == BUYER
        assert stored.gas_used == 120_000
        assert stored.log_index == 3

    def test_usd_amounts_use_token_prices(self, make_processor):
        oracle = StaticPriceOracle(prices={TOKEN_A: Decimal(2), TOKEN_B: Decimal("0.5")})
        processor = make_processor(price_oracle=oracle)

        swap = processor.process_exchange(make_event()).swap

        assert swap.amount_sold_usd == Decimal(2)
        assert swap.amount_bought_usd == Decimal("0.5")
        assert swap.volume_usd == Decimal("1.25")

    def test_usd_amounts_keep_full_precision(self, make_processor, registry):
        oracle = StaticPriceOracle(prices={TOKEN_A: Decimal("1.000000001"), TOKEN_B: Decimal(1)})
        processor = make_processor(price_oracle=oracle)

        swap = processor.process_exchange(
            make_event(tokens_sold=123456789123456789123456789123456)
        ).swap

        exact = Decimal("123456789246913578246913578.246912789123456")
        assert swap.amount_sold_usd == exact
        with registry.get_session() as session:
            stored = registry.get_swap_repo().get_record(session, swap.id)
        assert stored.amount_sold_usd == exact

        (snapshot,) = snapshots(registry, PLAIN_POOL, SnapshotPeriod.DAY)
        assert snapshot.amount_sold_usd == exact
        assert pool_totals(registry, PLAIN_POOL)[1] == swap.volume_usd

    def test_missing_gas_used_is_stored_as_zero(self, processor):
        swap = processor.process_exchange(make_event(gas_used=None)).swap
        assert swap.gas_used == 0

    def test_snapshots_and_totals(self, processor, registry):
        processor.process_exchange(make_event())

        for period in SnapshotPeriod:
            (snapshot,) = snapshots(registry, PLAIN_POOL, period)
            assert snapshot.count == 1
            assert snapshot.volume == Decimal(1)
            assert snapshot.volume_usd == Decimal(1)
            assert snapshot.bucket == TS // period.seconds()
            assert snapshot.timestamp == (TS // period.seconds()) * period.seconds()

        assert pool_totals(registry, PLAIN_POOL) == (Decimal(1), Decimal(1))


class TestFailedEvents:
    def test_lending_underlying_index_out_of_range_writes_nothing(self, processor, registry, journal):
        event = make_event(pool=LENDING_POOL, sold_id=5, bought_id=0, exchange_underlying=True)

        result = processor.process_exchange(event)

        assert not result.ok
        assert result.error.error_type == "index_out_of_range"
        assert result.error.context["pool"] == LENDING_POOL
        assert result.error.context["tx_hash"] == tx(1)
        assert swap_count(registry) == 0
        assert snapshot_count(registry) == 0
        assert pool_totals(registry, LENDING_POOL) == (Decimal(0), Decimal(0))
        assert journal == []

    def test_index_errors_logged_at_error_level(self, processor, caplog):
        with caplog.at_level(logging.ERROR, logger="volume_indexer"):
            processor.process_exchange(make_event(sold_id=7))

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert any(getattr(r, "error_type", None) == "index_out_of_range" for r in errors)

    def test_identical_failures_share_error_id(self, processor):
        first = processor.process_exchange(make_event(sold_id=7)).error
        second = processor.process_exchange(make_event(sold_id=7)).error

        assert first.error_id == second.error_id
        assert set(structs.asdict(first)) == {
            "stage", "error_type", "message", "error_id", "context",
        }

    def test_undefined_token(self, processor, registry):
        result = processor.process_exchange(make_event(pool=UNDEFINED_POOL))
        assert result.error.error_type == "undefined_token"
        assert swap_count(registry) == 0

    def test_unregistered_pool(self, processor, registry):
        result = processor.process_exchange(make_event(pool=UNKNOWN_POOL))
        assert result.error.error_type == "pool_not_found"
        assert result.error.stage == "load"
        assert snapshot_count(registry) == 0

    def test_unexpected_errors_roll_back_and_propagate(self, make_processor, registry):
        class BrokenOracle(RecordingOracle):
            def get_stable_swap_token_price(self, pool, token, timestamp):
                raise RuntimeError("price source unavailable")

        processor = make_processor(price_oracle=BrokenOracle())
        with pytest.raises(RuntimeError):
            processor.process_exchange(make_event())

        assert swap_count(registry) == 0
        assert pool_totals(registry, PLAIN_POOL) == (Decimal(0), Decimal(0))

    def test_failure_does_not_stop_the_batch(self, processor, registry):
        events = [
            make_event(log_index=0),
            make_event(sold_id=9, log_index=1),
            make_event(pool=UNKNOWN_POOL, log_index=2),
            make_event(log_index=3),
        ]

        stats = processor.process_events(events)

        assert stats.events == 4
        assert stats.swaps == 2
        assert stats.skipped == {"index_out_of_range": 1, "pool_not_found": 1}
        assert stats.skipped_total == 2
        assert [e.error_type for e in stats.errors] == ["index_out_of_range"]
        assert pool_totals(registry, PLAIN_POOL) == (Decimal(2), Decimal(2))


class TestSwapIdentity:
    def test_legacy_id_for_dust_amount(self, make_processor):
        processor = make_processor(legacy_swap_ids=True)
        swap = processor.process_exchange(make_event(tokens_bought=1, log_index=0)).swap
        assert swap.id == f"{tx(1)}-0.000000000000000001"

    def test_distinct_log_indices_both_persist(self, processor, registry):
        processor.process_exchange(make_event(log_index=1))
        processor.process_exchange(make_event(log_index=2, tokens_sold=2 * 10 ** 6))

        assert swap_count(registry, PLAIN_POOL) == 2
        with registry.get_session() as session:
            swaps = registry.get_swap_repo().get_by_tx_hash(session, tx(1))
        assert [s.id for s in swaps] == [f"{tx(1)}-1", f"{tx(1)}-2"]

    def test_legacy_ids_overwrite_same_bought_amount(self, make_processor, registry, caplog):
        processor = make_processor(legacy_swap_ids=True)

        first = processor.process_exchange(make_event(log_index=1)).swap
        with caplog.at_level(logging.WARNING, logger="volume_indexer"):
            second = processor.process_exchange(
                make_event(log_index=2, tokens_sold=2 * 10 ** 6)
            ).swap

        assert first.id == second.id == f"{tx(1)}-1"
        assert swap_count(registry) == 1
        with registry.get_session() as session:
            stored = registry.get_swap_repo().get_record(session, first.id)
        assert stored.amount_sold == Decimal(2)
        assert "Swap id collision" in caplog.text

    def test_events_without_log_index_use_legacy_ids(self, processor, registry):
        processor.process_exchange(make_event())
        processor.process_exchange(make_event(tokens_sold=3 * 10 ** 6))

        assert swap_count(registry) == 1


class TestAggregation:
    def test_cumulative_totals_match_sum_of_swaps(self, make_processor, registry):
        oracle = StaticPriceOracle(prices={TOKEN_A: Decimal("1.01"), TOKEN_B: Decimal("0.99")})
        processor = make_processor(price_oracle=oracle)
        events = [
            make_event(tokens_sold=1_234_567, tokens_bought=1_230_000_000_000_000_001,
                       timestamp=TS + i * 5000, log_index=i)
            for i in range(6)
        ]

        swaps = [processor.process_exchange(event).swap for event in events]

        volume = sum((s.volume for s in swaps), Decimal(0))
        volume_usd = sum((s.volume_usd for s in swaps), Decimal(0))
        assert pool_totals(registry, PLAIN_POOL) == (volume, volume_usd)

        for period in SnapshotPeriod:
            period_snapshots = snapshots(registry, PLAIN_POOL, period)
            assert sum(s.count for s in period_snapshots) == len(events)
            assert sum((s.volume for s in period_snapshots), Decimal(0)) == volume
            assert sum((s.volume_usd for s in period_snapshots), Decimal(0)) == volume_usd

    def test_snapshot_volume_is_mean_of_legs(self, processor, registry):
        processor.process_exchange(make_event(tokens_sold=3 * 10 ** 6, log_index=0))
        processor.process_exchange(make_event(tokens_bought=5 * 10 ** 17, log_index=1))

        (snapshot,) = snapshots(registry, PLAIN_POOL, SnapshotPeriod.DAY)
        assert snapshot.amount_sold == Decimal(4)
        assert snapshot.amount_bought == Decimal("1.5")
        assert snapshot.volume == (snapshot.amount_sold + snapshot.amount_bought) / 2
        assert snapshot.volume_usd == (snapshot.amount_sold_usd + snapshot.amount_bought_usd) / 2

    def test_buckets_partition_time(self, processor, registry):
        hour_start = (TS // 3600) * 3600
        timestamps = [hour_start, hour_start + 3599, hour_start + 3600, hour_start + 86400]
        for i, timestamp in enumerate(timestamps):
            processor.process_exchange(make_event(timestamp=timestamp, log_index=i))

        hourly = snapshots(registry, PLAIN_POOL, SnapshotPeriod.HOUR)
        assert [s.count for s in hourly] == [2, 1, 1]
        for snapshot in hourly:
            assert snapshot.timestamp % 3600 == 0

        daily = snapshots(registry, PLAIN_POOL, SnapshotPeriod.DAY)
        expected_days = sorted({t // 86400 for t in timestamps})
        assert [s.bucket for s in daily] == expected_days
        assert sum(s.count for s in daily) == 4

        weekly = snapshots(registry, PLAIN_POOL, SnapshotPeriod.WEEK)
        assert [s.bucket for s in weekly] == sorted({t // 604800 for t in timestamps})

    def test_pools_aggregate_independently(self, processor, registry):
        processor.process_exchange(make_event(log_index=0))
        processor.process_exchange(make_event(pool=CRYPTO_POOL, log_index=1))

        assert pool_totals(registry, PLAIN_POOL)[0] == Decimal(1)
        assert pool_totals(registry, CRYPTO_POOL)[0] == Decimal(1)
        assert len(snapshots(registry, CRYPTO_POOL, SnapshotPeriod.HOUR)) == 1


class TestNotifiers:
    def test_candles_then_price_feed(self, processor, journal):
        event = make_event(pool=META_POOL, sold_id=2, bought_id=1,
                           tokens_sold=5 * 10 ** 6, tokens_bought=5 * 10 ** 18,
                           exchange_underlying=True)

        processor.process_exchange(event)

        assert journal == [
            ("candles", META_POOL, TS, DAI, Decimal(5), USDC, Decimal(5), BLOCK),
            ("price_feed", META_POOL, USDC, DAI, Decimal(5), Decimal(5), 2, 1, True, BLOCK, TS),
        ]


class TestPriceOracleSelection:
    def test_stable_pool_uses_stableswap_prices(self, make_processor):
        oracle = RecordingOracle()
        make_processor(price_oracle=oracle).process_exchange(make_event())

        assert [call[0] for call in oracle.calls] == ["stable", "stable"]
        assert [call[2] for call in oracle.calls] == [TOKEN_A, TOKEN_B]

    def test_v2_pool_uses_cryptoswap_prices(self, make_processor):
        oracle = RecordingOracle(crypto_price=Decimal(3))
        swap = make_processor(price_oracle=oracle).process_exchange(
            make_event(pool=CRYPTO_POOL)
        ).swap

        assert [call[0] for call in oracle.calls] == ["crypto", "crypto"]
        assert swap.volume_usd == Decimal(3)


def test_hex_encoded_event_fields(processor):
    event = make_event(tokens_sold=hex(10 ** 6), tokens_bought=hex(10 ** 18),
                       block_number=hex(BLOCK), timestamp=hex(TS), log_index="0x4",
                       buyer=addr(0xBEEF).upper().replace("0X", "0x"))

    swap = processor.process_exchange(event).swap

    assert swap.amount_sold == Decimal(1)
    assert swap.block_number == BLOCK
    assert swap.timestamp == TS
    assert swap.log_index == 4
    assert swap.buyer == BUYER
