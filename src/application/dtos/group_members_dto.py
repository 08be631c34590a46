"""会派・機関メンバー一覧のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.value_objects.legislator_identity import LegislatorIdentity


@dataclass(frozen=True)
class OrganDTO:
    """機関（会派・委員会など）の詳細."""

    organ_id: str
    name: str
    legislature: str = ""
    start_date: str = ""
    end_date: str | None = None
    organ_type: str = ""
    member_ids: tuple[str, ...] = ()


@dataclass
class GetGroupMembersInputDTO:
    """入力DTO."""

    organ_id: str
    legislature: str


@dataclass
class GroupMembersOutputDTO:
    """出力DTO."""

    organ: OrganDTO | None = None
    members: list[LegislatorIdentity] = field(default_factory=list)
    error: bool = False
    error_message: str | None = None
