"""議員プロフィール表示コマンド."""

import asyncio

import click

from src.application.dtos.legislator_profile_dto import format_date
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("legislator_id")
@with_error_handling
def profile(legislator_id: str):
    """議員の詳細プロフィール・所属機関・連絡先・投票制限をAPIから表示する."""
    asyncio.run(_run_profile(legislator_id))


async def _run_profile(legislator_id: str) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.get_legislator_profile_usecase()
    try:
        result = await usecase.execute(legislator_id)
    finally:
        await container.shutdown()

    if result.error or result.details is None:
        raise click.ClickException(
            result.error_message or "プロフィールの取得に失敗しました"
        )

    details = result.details
    click.echo(f"=== {details.title} ({details.legislator_id}) ===")
    click.echo(f"  職業:     {details.profession}")
    if details.political_group:
        click.echo(f"  会派:     {details.political_group}")
    if details.birth_date:
        click.echo(f"  生年月日: {format_date(details.birth_date)}")
    if details.birth_place:
        click.echo(f"  出生地:   {details.birth_place}")
    if details.hatvp_url:
        click.echo(f"  HATVP:    {details.hatvp_url}")

    if details.contacts:
        click.echo("\n連絡先:")
        for contact in details.contacts:
            click.echo(f"  {contact.contact_type}: {contact.value}")

    if details.organs:
        click.echo("\n所属機関:")
        for type_label, organs in details.organs_by_type().items():
            click.echo(f"  [{type_label}]")
            for organ in organs:
                click.echo(f"    {organ.name} ({organ.period})")

    if result.recusals:
        click.echo("\n投票制限 (déports):")
        for recusal in result.recusals:
            click.echo(f"  - {recusal.scope}")
            if recusal.target:
                click.echo(f"    {recusal.target}")
