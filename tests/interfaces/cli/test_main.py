"""CLI エントリポイントのテスト."""

from unittest.mock import MagicMock, patch

import click

from click.testing import CliRunner

from src.infrastructure.exceptions import ExternalServiceError
from src.interfaces.cli.base import with_error_handling
from src.interfaces.cli.main import cli


class TestCli:
    def test_help_lists_command_groups(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("ballot", "legislators", "votes", "groups"):
            assert name in result.output

    @patch("src.interfaces.cli.main.configure_logging")
    def test_log_level_option(self, mock_configure: MagicMock) -> None:
        result = CliRunner().invoke(cli, ["--log-level", "DEBUG", "votes", "--help"])

        assert result.exit_code == 0
        mock_configure.assert_called_once_with("DEBUG")


class TestWithErrorHandling:
    def test_infrastructure_error_becomes_click_exception(self) -> None:
        @click.command()
        @with_error_handling
        def failing():
            raise ExternalServiceError("open-data-api", "timeout", {"url": "/x"})

        result = CliRunner().invoke(failing)

        assert result.exit_code == 1
        assert "open-data-api: timeout" in result.output

    def test_click_exception_passes_through(self) -> None:
        @click.command()
        @with_error_handling
        def failing():
            raise click.ClickException("そのまま")

        result = CliRunner().invoke(failing)

        assert result.exit_code == 1
        assert "そのまま" in result.output
