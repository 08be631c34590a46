"""議員テーブル統計コマンド."""

import asyncio

import click

from src.interfaces.cli.base import with_error_handling


@click.command()
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@with_error_handling
def stats(legislature: str | None):
    """保存済みの議員数を表示する."""
    asyncio.run(_run_stats(legislature))


async def _run_stats(legislature: str | None) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    legislature = legislature or container.settings.default_legislature
    try:
        async with container.repositories.legislator_repository_scope() as repo:
            count = await repo.count_by_legislature(legislature)
    finally:
        await container.shutdown()

    click.echo(f"=== 第{legislature}立法期 議員テーブル ===")
    click.echo(f"  保存済み議員数: {count:,}")
    if count == 0:
        click.echo("\n議員が保存されていません。")
        click.echo("'scrutinbase legislators sync' を実行してください。")
