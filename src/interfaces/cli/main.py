"""scrutinbase CLI エントリポイント."""

import click

from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.commands.ballot import ballot
from src.interfaces.cli.commands.groups import groups
from src.interfaces.cli.commands.legislators import legislators
from src.interfaces.cli.commands.votes import votes


@click.group()
@click.option("--log-level", default=None, help="ログレベル (DEBUG, INFO, ...)")
def cli(log_level: str | None):
    """国民議会スクルタン（記名投票）閲覧ツール."""
    configure_logging(log_level or get_settings().log_level)


cli.add_command(ballot)
cli.add_command(legislators)
cli.add_command(votes)
cli.add_command(groups)


if __name__ == "__main__":
    cli()
