"""会派別の議員投票表示コマンド."""

import asyncio

import click

from src.application.dtos.group_vote_detail_dto import GetGroupVoteDetailInputDTO
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("group_id")
@click.argument("number")
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@click.option("--limit", type=int, default=20, help="優先して氏名解決する先頭行数")
@click.option("--sort-by-name/--api-order", default=True, help="氏名順に並べる")
@with_error_handling
def group(
    group_id: str,
    number: str,
    legislature: str | None,
    limit: int,
    sort_by_name: bool,
):
    """会派内の議員ごとの投票を表示する."""
    asyncio.run(_run_group(group_id, number, legislature, limit, sort_by_name))


async def _run_group(
    group_id: str,
    number: str,
    legislature: str | None,
    limit: int,
    sort_by_name: bool,
) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.get_group_vote_detail_usecase()
    try:
        output = await usecase.execute(
            GetGroupVoteDetailInputDTO(
                group_id=group_id,
                number=number,
                legislature=legislature or container.settings.default_legislature,
                visible_count=limit,
                sort_by_name=sort_by_name,
            )
        )
    finally:
        await container.shutdown()

    if output.error or output.group is None:
        raise click.ClickException(output.error_message or "会派の詳細を取得できません")

    detail = output.group
    click.echo(f"=== {detail.name} : {detail.majority_position.label} ===")
    if not detail.legislator_votes:
        click.echo("議員別の投票データがありません。")
    for i, vote in enumerate(detail.legislator_votes, 1):
        extras = []
        if vote.delegation:
            extras.append("délégation")
        if vote.cause_label:
            extras.append(vote.cause_label)
        suffix = f" ({', '.join(extras)})" if extras else ""
        click.echo(f"  {i:>4}. {vote.display_name:<40} {vote.position.label}{suffix}")
    if output.dropped_voter_count:
        click.echo(f"\nIDのない投票者 {output.dropped_voter_count} 件を除外しました。")
