"""会派メンバー一覧コマンド."""

import asyncio

import click

from src.application.dtos.group_members_dto import GetGroupMembersInputDTO
from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("organ_id")
@click.option("--legislature", "-l", default=None, help="立法期（省略時は設定値）")
@with_error_handling
def members(organ_id: str, legislature: str | None):
    """会派（機関）のメンバーを氏名順に表示する."""
    asyncio.run(_run_members(organ_id, legislature))


async def _run_members(organ_id: str, legislature: str | None) -> None:
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    usecase = container.use_cases.get_group_members_usecase()
    identity_cache = container.services.identity_cache()
    try:
        output = await usecase.execute(
            GetGroupMembersInputDTO(
                organ_id=organ_id,
                legislature=legislature or container.settings.default_legislature,
            )
        )
    finally:
        await container.shutdown()

    if output.error or output.organ is None:
        raise click.ClickException(output.error_message or "機関を取得できません")

    organ = output.organ
    click.echo(f"=== {organ.name} ({organ.organ_id}) ===")
    if organ.start_date:
        period = f"{organ.start_date} - {organ.end_date or ''}"
        click.echo(f"  期間: {period}")
    click.echo(f"  メンバー数: {len(output.members)}")
    for i, member in enumerate(output.members, 1):
        name = identity_cache.display_name(member.legislator_id)
        click.echo(f"  {i:>4}. {name} ({member.legislator_id})")
