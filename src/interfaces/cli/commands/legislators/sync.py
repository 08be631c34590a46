"""議員名簿同期コマンド."""

import asyncio
import json

import click

from src.application.dtos.legislator_sync_dto import SyncLegislatorsInputDTO
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@click.option("--force", is_flag=True, help="既存の議員を削除してから同期する")
@click.option(
    "--active-only",
    is_flag=True,
    help="organes/acteurs ではなく現職議員一覧のみから同期する",
)
@click.option("--json", "as_json", is_flag=True, help="結果をJSONで出力する")
@with_error_handling
def sync(legislature: str | None, force: bool, active_only: bool, as_json: bool):
    """オープンデータAPIから議員名簿を取得して保存する."""
    asyncio.run(_run_sync(legislature, force, active_only, as_json))


async def _run_sync(
    legislature: str | None, force: bool, active_only: bool, as_json: bool
) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.sync_legislators_usecase()
    try:
        output = await usecase.execute(
            SyncLegislatorsInputDTO(
                legislature=legislature or container.settings.default_legislature,
                force=force,
                full_roster=not active_only,
            )
        )
    finally:
        await container.shutdown()

    if as_json:
        click.echo(json.dumps(output.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(output.message)
        for error in output.fetch_errors:
            click.echo(f"  [取得] {error}")
        for error in output.sync_errors:
            click.echo(f"  [同期] {error}")

    if not output.success:
        raise click.ClickException(output.message)
