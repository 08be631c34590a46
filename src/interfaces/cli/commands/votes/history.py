"""議員の投票履歴表示コマンド."""

import asyncio

from pathlib import Path

import click

from src.domain.value_objects.vote_position import VotePosition
from src.interfaces.cli.base import with_error_handling
from src.interfaces.cli.commands.votes.export import export_votes_csv, format_vote_date


@click.command()
@click.argument("query")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="CSVファイルに出力する",
)
@click.option("--limit", type=int, default=50, help="表示する件数")
@with_error_handling
def history(query: str, csv_path: Path | None, limit: int):
    """議員（IDまたは氏名）の投票履歴を表示する."""
    asyncio.run(_run_history(query, csv_path, limit))


async def _run_history(query: str, csv_path: Path | None, limit: int) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.legislator_votes_usecase()
    try:
        output = await usecase.history(query)
    finally:
        await container.shutdown()

    if output.error:
        raise click.ClickException(output.error_message or "投票履歴を取得できません")

    if not output.votes:
        click.echo(f"'{query}' の投票履歴はありません。")
        return

    counts = output.count_by_position()
    click.echo(f"=== {query} の投票履歴 ({len(output.votes)}件) ===")
    click.echo(
        "  "
        + " / ".join(
            f"{position.label} {counts[position]}" for position in VotePosition
        )
    )
    for vote in output.votes[:limit]:
        click.echo(
            f"  n°{vote.number:>6} {format_vote_date(vote.date):<10} "
            f"{vote.position.label:<10} {vote.title}"
        )

    if csv_path is not None:
        count = export_votes_csv(output.votes, csv_path)
        click.echo(f"\n{count} 件を {csv_path} に出力しました。")
