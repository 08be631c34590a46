"""groups members コマンドのテスト."""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from src.application.dtos.group_members_dto import GroupMembersOutputDTO, OrganDTO
from src.domain.value_objects.legislator_identity import LegislatorIdentity
from src.interfaces.cli.commands.groups import groups


_DI_PATH = "src.infrastructure.di.container"


def _setup_container(mock_get_container: MagicMock) -> MagicMock:
    mock_container = MagicMock()
    mock_container.settings.default_legislature = "17"
    mock_container.shutdown = AsyncMock()
    mock_get_container.return_value = mock_container
    return mock_container


class TestMembersCommand:
    @patch(f"{_DI_PATH}.get_container")
    def test_members_lists_names(self, mock_get_container: MagicMock):
        mock_container = _setup_container(mock_get_container)
        usecase = mock_container.use_cases.get_group_members_usecase.return_value
        usecase.execute = AsyncMock(
            return_value=GroupMembersOutputDTO(
                organ=OrganDTO(
                    organ_id="PO800",
                    name="Renaissance",
                    start_date="2024-07-18",
                ),
                members=[
                    LegislatorIdentity("PA1", "Anne", "Martin"),
                    LegislatorIdentity("PA2"),
                ],
            )
        )
        names = {"PA1": "Anne Martin", "PA2": "Legislator 2"}
        identity_cache = mock_container.services.identity_cache.return_value
        identity_cache.display_name.side_effect = names.__getitem__

        result = CliRunner().invoke(groups, ["members", "PO800"])

        assert result.exit_code == 0
        assert "=== Renaissance (PO800) ===" in result.output
        assert "2024-07-18 -" in result.output
        assert "メンバー数: 2" in result.output
        assert "Anne Martin (PA1)" in result.output
        assert "Legislator 2 (PA2)" in result.output
        input_dto = usecase.execute.call_args.args[0]
        assert input_dto.organ_id == "PO800"
        assert input_dto.legislature == "17"

    @patch(f"{_DI_PATH}.get_container")
    def test_members_error(self, mock_get_container: MagicMock):
        mock_container = _setup_container(mock_get_container)
        usecase = mock_container.use_cases.get_group_members_usecase.return_value
        usecase.execute = AsyncMock(
            return_value=GroupMembersOutputDTO(
                error=True, error_message="機関 PO0 が見つかりません"
            )
        )

        result = CliRunner().invoke(groups, ["members", "PO0"])

        assert result.exit_code == 1
        assert "PO0" in result.output
        mock_container.shutdown.assert_awaited_once()
