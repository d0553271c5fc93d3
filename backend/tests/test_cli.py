"""
Tests for the subs-api command line.
"""

import pytest
from sqlalchemy import create_engine, inspect

from subs_api import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: False)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


def _tables(url):
    engine = create_engine(url)
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


class TestMigrate:
    """Test the migrate and migrate-down commands."""

    def test_migrate_creates_tables(self, database_url):
        assert cli.main(["migrate", "--database-url", database_url]) == 0

        assert {"subscriptions", "error_logs"} <= _tables(database_url)

    def test_migrate_is_repeatable(self, database_url):
        cli.main(["migrate", "--database-url", database_url])

        assert cli.main(["migrate", "--database-url", database_url]) == 0

    def test_migrate_down_requires_confirmation(self, database_url):
        cli.main(["migrate", "--database-url", database_url])

        assert cli.main(["migrate-down", "--database-url", database_url]) == 1
        assert "subscriptions" in _tables(database_url)

    def test_migrate_down(self, database_url):
        cli.main(["migrate", "--database-url", database_url])

        assert cli.main(["migrate-down", "--database-url", database_url, "--yes"]) == 0
        assert _tables(database_url) == set()


class TestParser:
    """Test argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_serve_options(self):
        args = cli.build_parser().parse_args(["serve", "--port", "9000", "--reload"])

        assert args.port == 9000
        assert args.reload is True
        assert args.handler is cli.run_server
