"""Basic tests for the SQLPager package and CLI."""

from click.testing import CliRunner

import sqlpager
from sqlpager.cli.main import cli


class TestPackageBasics:
    """Test basic package functionality."""

    def test_package_version(self) -> None:
        assert isinstance(sqlpager.__version__, str)
        assert len(sqlpager.__version__) > 0

    def test_package_exports(self) -> None:
        """Test that package exports expected classes."""
        for name in ("SQLPagerError", "ConfigurationError", "DatabaseError", "PaginationError",
                     "Where", "Order", "Paginator", "get_strategy"):
            assert hasattr(sqlpager, name), name

    def test_errors_share_a_base(self) -> None:
        assert issubclass(sqlpager.PaginationError, sqlpager.SQLPagerError)
        assert issubclass(sqlpager.ConfigurationError, sqlpager.SQLPagerError)

    def test_database_error_context(self) -> None:
        error = sqlpager.DatabaseError("boom", database_type="sqlite", details={"query": "SELECT 1"})
        assert error.database_type == "sqlite"
        assert error.details == {"query": "SELECT 1"}
        assert not hasattr(error, "connection_string")


class TestCLI:
    """Test CLI functionality."""

    def test_cli_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'SQLPager' in result.output

    def test_cli_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert f'SQLPager v{sqlpager.__version__}' in result.output

    def test_cli_paginate_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ['paginate', '--help'])
        assert result.exit_code == 0
        assert '--page-size' in result.output
