"""スクルタン詳細表示コマンド."""

import asyncio

import click

from src.application.dtos.ballot_details_dto import (
    BallotDetailsOutputDTO,
    GetBallotDetailsInputDTO,
)
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("number")
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@click.option("--preload", type=int, default=2, help="議員別内訳を読み込む会派数")
@with_error_handling
def show(number: str, legislature: str | None, preload: int):
    """スクルタンの集計と会派別内訳を表示する."""
    asyncio.run(_run_show(number, legislature, preload))


async def _run_show(number: str, legislature: str | None, preload: int) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    legislature = legislature or container.settings.default_legislature
    usecase = container.use_cases.get_ballot_details_usecase()
    try:
        output = await usecase.execute(
            GetBallotDetailsInputDTO(
                number=number, legislature=legislature, preload_groups=preload
            )
        )
    finally:
        await container.shutdown()

    if output.error or output.summary is None:
        raise click.ClickException(output.error_message or "スクルタンを取得できません")
    _echo_details(output)


def _echo_details(output: BallotDetailsOutputDTO) -> None:
    summary = output.summary
    assert summary is not None

    click.echo(
        f"=== スクルタン n°{summary.number} ({summary.legislature}e législature) ==="
    )
    if summary.date:
        click.echo(f"  日付:   {summary.date}")
    if summary.title:
        click.echo(f"  件名:   {summary.title}")
    if summary.description:
        click.echo(f"  結果:   {summary.description}")

    counts = summary.counts
    if counts.is_empty:
        click.echo("\n集計データがありません。")
    else:
        click.echo("\n=== 集計 ===")
        click.echo(f"  Votants:    {counts.voters:>5}")
        click.echo(f"  Pour:       {counts.for_:>5}")
        click.echo(f"  Contre:     {counts.against:>5}")
        click.echo(f"  Abstention: {counts.abstain:>5}")

    if output.groups:
        click.echo(f"\n=== 会派別 ({len(output.groups)}会派) ===")
        for group in output.groups.values():
            c = group.counts
            click.echo(
                f"  [{group.group_id}] {group.name}: {group.majority_position.label}"
                f" (Pour {c.for_} / Contre {c.against} / Abstention {c.abstain}"
                f" / Absent {c.absent})"
            )
            for vote in group.legislator_votes:
                marker = " (délégation)" if vote.delegation else ""
                click.echo(
                    f"      - {vote.display_name}: {vote.position.label}{marker}"
                )
            if not group.legislator_votes:
                click.echo(
                    "      詳細: scrutinbase ballot group"
                    f" {group.group_id} {summary.number}"
                )

    if output.dropped_voter_count:
        click.echo(f"\nIDのない投票者 {output.dropped_voter_count} 件を除外しました。")
    if output.store_empty:
        click.echo(
            "\n議員テーブルが空です。'scrutinbase legislators sync' を実行してください。"
        )
    click.echo(f"\n{summary.assemblee_url}")
