"""議員情報表示コマンド."""

import asyncio

import click

from src.domain.utils.legislator_id import ensure_legislator_id_format
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("legislator_id")
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@with_error_handling
def show(legislator_id: str, legislature: str | None):
    """議員IDから氏名・会派を表示する（保存済みデータ優先）."""
    asyncio.run(_run_show(legislator_id, legislature))


async def _run_show(legislator_id: str, legislature: str | None) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    canonical = ensure_legislator_id_format(legislator_id)
    identity_cache = container.services.identity_cache()
    try:
        identity = await identity_cache.resolve(
            canonical, legislature or container.settings.default_legislature
        )
    finally:
        await container.shutdown()

    click.echo(f"=== {canonical} ===")
    click.echo(f"  氏名:   {identity_cache.display_name(canonical)}")
    if identity.political_group:
        click.echo(f"  会派:   {identity.political_group}")
    if identity.profession:
        click.echo(f"  職業:   {identity.profession}")
    click.echo(f"  状態:   {identity.state.value}")
