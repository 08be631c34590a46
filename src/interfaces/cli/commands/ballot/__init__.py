"""スクルタン CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.ballot.group import group
from src.interfaces.cli.commands.ballot.show import show


@click.group()
def ballot():
    """スクルタン（記名投票）関連コマンド."""
    pass


ballot.add_command(show)
ballot.add_command(group)
