"""議員検索コマンド."""

import asyncio

import click

from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("query")
@with_error_handling
def search(query: str):
    """議員をID（PA1234）または氏名で検索する."""
    asyncio.run(_run_search(query))


async def _run_search(query: str) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.legislator_votes_usecase()
    try:
        result = await usecase.search(query)
    finally:
        await container.shutdown()

    if result.error:
        raise click.ClickException(result.error_message or "検索に失敗しました")

    if result.has_homonyms:
        click.echo(f"'{query}' に該当する議員が複数います:")
        for option in result.options:
            click.echo(f"  {option.legislator_id}: {option.full_name}")
        click.echo("IDを指定して再検索してください。")
        return

    if result.legislator is None:
        click.echo(f"'{query}' に該当する議員は見つかりませんでした。")
        return

    profile = result.legislator
    click.echo(f"=== {profile.full_name} ({profile.legislator_id}) ===")
    click.echo(f"  職業: {profile.profession}")
