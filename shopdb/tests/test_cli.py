"""Tests for the shopdb command line."""

import logging

import pytest
from click.testing import CliRunner

from ..cli.main import cli

@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI replaces the root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

@pytest.fixture
def runner():
    return CliRunner()

def write_settings(path, url):
    path.write_text(
        f"DB_URL={url}\n"
        "DB_DRIVER=pysqlite\n"
        "DB_USERNAME=\n"
        "DB_PASSWORD=\n"
        "DB_POOL_MAXIMUM_SIZE=3\n"
        "DB_POOL_MINIMUM_IDLE=1\n"
    )
    return path

@pytest.fixture
def env_file(tmp_path, database_url):
    return write_settings(tmp_path / 'shop.env', database_url)

@pytest.fixture
def unreachable_env_file(tmp_path):
    return write_settings(tmp_path / 'broken.env', f"sqlite:///{tmp_path / 'missing' / 'shop.db'}")

def test_help_lists_commands(runner):
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    for command in ('test-connection', 'init-db', 'demo', 'pool-stats'):
        assert command in result.output

def test_test_connection_success(runner, env_file):
    result = runner.invoke(cli, ['--env-file', str(env_file), 'test-connection'])

    assert result.exit_code == 0
    assert "Successfully connected to the database!" in result.output

def test_test_connection_failure(runner, unreachable_env_file):
    result = runner.invoke(cli, ['--env-file', str(unreachable_env_file), 'test-connection'])

    assert result.exit_code == 1
    assert "Successfully connected" not in result.output

def test_init_db_seeds_then_keeps_rows(runner, env_file):
    first = runner.invoke(cli, ['--env-file', str(env_file), 'init-db'])
    second = runner.invoke(cli, ['--env-file', str(env_file), 'init-db'])

    assert first.exit_code == 0
    assert "Database initialized with 8 sample products" in first.output
    assert second.exit_code == 0
    assert "existing products kept" in second.output

def test_demo_after_init(runner, env_file):
    runner.invoke(cli, ['--env-file', str(env_file), 'init-db'])

    result = runner.invoke(cli, ['--env-file', str(env_file), 'demo'])

    assert result.exit_code == 0
    assert "Demo completed" in result.output

def test_demo_without_schema_reports_error(runner, env_file):
    result = runner.invoke(cli, ['--env-file', str(env_file), 'demo'])

    assert result.exit_code == 0
    assert "Demo stopped after a database error" in result.output

def test_demo_unreachable_database(runner, unreachable_env_file):
    result = runner.invoke(cli, ['--env-file', str(unreachable_env_file), 'demo'])

    assert result.exit_code == 1
    assert "Demo completed" not in result.output

def test_pool_stats(runner, env_file):
    result = runner.invoke(cli, ['--env-file', str(env_file), 'pool-stats'])

    assert result.exit_code == 0
    assert "Active connections: 0" in result.output
    assert "Idle connections:   1" in result.output
    assert "Total connections:  1" in result.output

def test_debug_flag(runner, env_file):
    result = runner.invoke(cli, ['--debug', '--env-file', str(env_file), 'test-connection'])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.DEBUG
