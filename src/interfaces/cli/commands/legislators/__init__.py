"""議員名簿 CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.legislators.profile import profile
from src.interfaces.cli.commands.legislators.show import show
from src.interfaces.cli.commands.legislators.stats import stats
from src.interfaces.cli.commands.legislators.sync import sync


@click.group()
def legislators():
    """議員名簿関連コマンド."""
    pass


legislators.add_command(sync)
legislators.add_command(stats)
legislators.add_command(show)
legislators.add_command(profile)
