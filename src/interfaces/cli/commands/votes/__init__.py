"""議員投票履歴 CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.votes.history import history
from src.interfaces.cli.commands.votes.search import search


@click.group()
def votes():
    """議員検索・投票履歴関連コマンド."""
    pass


votes.add_command(search)
votes.add_command(history)
