"""会派 CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.groups.members import members


@click.group()
def groups():
    """会派・機関関連コマンド."""
    pass


groups.add_command(members)
