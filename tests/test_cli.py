# tests/test_cli.py

import pytest
from click.testing import CliRunner

from volume_indexer.cli.__main__ import cli

from pool_fixtures import BUYER, PLAIN_POOL, TOKEN_A, TOKEN_B, TS, tx

REGISTRY_YAML = f"""
pools:
  - address: "{PLAIN_POOL}"
    name: A/B
    coins: ["{TOKEN_A}", "{TOKEN_B}"]
    coin_decimals: [6, 18]
"""


def event_line(log_index: int, sold_id: int = 0) -> str:
    return (
        '{"buyer": "%s", "sold_id": %d, "bought_id": 1, "tokens_sold": "1000000", '
        '"tokens_bought": "0xde0b6b3a7640000", "timestamp": %d, "block_number": 18500000, '
        '"address": "%s", "tx_hash": "%s", "log_index": %d}'
    ) % (BUYER, sold_id, TS, PLAIN_POOL, tx(1), log_index)


@pytest.fixture
def runner(tmp_path):
    return CliRunner(env={
        "VOLUME_INDEXER_DB_URL": f"sqlite:///{tmp_path / 'cli.db'}",
        "LOG_LEVEL": "WARNING",
    })


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "pools.yaml"
    path.write_text(REGISTRY_YAML)
    return str(path)


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join([
        event_line(0),
        "",
        "not json",
        event_line(1, sold_id=4),
        event_line(2),
    ]) + "\n")
    return str(path)


def test_db_init(runner):
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0, result.output
    assert "Database tables ready (sqlite)" in result.output


def test_pools_import_dry_run(runner, registry_file):
    result = runner.invoke(cli, ["pools", "import", registry_file, "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "DRY RUN" in result.output
    assert PLAIN_POOL in result.output


def test_import_process_and_query(runner, registry_file, events_file):
    result = runner.invoke(cli, ["pools", "import", registry_file])
    assert result.exit_code == 0, result.output
    assert "Created: 1" in result.output

    result = runner.invoke(cli, ["pools", "import", registry_file])
    assert "Unchanged: 1" in result.output

    result = runner.invoke(cli, ["process", events_file])
    assert result.exit_code == 0, result.output
    assert "Events: 3" in result.output
    assert "Swaps recorded: 2" in result.output
    assert "index_out_of_range: 1" in result.output
    assert "Undecodable lines: 1" in result.output

    result = runner.invoke(cli, ["volume", "show", PLAIN_POOL, "--period", "hour"])
    assert result.exit_code == 0, result.output
    assert "1hr snapshots" in result.output

    result = runner.invoke(cli, ["swaps", "list", PLAIN_POOL])
    assert result.exit_code == 0, result.output
    assert result.output.count("bought 1 ") == 2

    result = runner.invoke(cli, ["pools", "show", PLAIN_POOL])
    assert result.exit_code == 0, result.output
    assert "Cumulative volume: 2" in result.output


def test_unknown_period_is_rejected(runner):
    result = runner.invoke(cli, ["volume", "show", PLAIN_POOL, "--period", "fortnight"])
    assert result.exit_code != 0
    assert "Unknown period" in result.output


def test_unknown_pool(runner):
    runner.invoke(cli, ["db", "init"])
    result = runner.invoke(cli, ["pools", "show", PLAIN_POOL])
    assert result.exit_code != 0
    assert "Pool not found" in result.output
