"""議員プロフィール（詳細・所属機関・連絡先・投票制限）のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field


# 機関種別コード → 表示ラベル
ORGAN_TYPE_LABELS: dict[str, str] = {
    "GP": "Groupe politique",
    "COMNL": "Commission",
    "COMPER": "Commission permanente",
    "GE": "Groupe d'études",
    "GEVI": "Groupe d'amitié",
    "GA": "Groupe d'amitié",
    "MISINF": "Mission d'information",
    "MISINFPRE": "Mission d'information présidentielle",
    "COMSPEC": "Commission spéciale",
    "CNPE": "Commission d'enquête",
    "OFFPAR": "Office parlementaire",
    "PARPOL": "Parti politique",
    "ORGEXTPARL": "Organisme extraparlementaire",
}


def format_date(value: str | None) -> str:
    """YYYY-MM-DD を DD/MM/YYYY にする。解釈できなければそのまま返す."""
    if not value:
        return "Non renseigné"
    parts = value[:10].split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return value
    year, month, day = parts
    return f"{day}/{month}/{year}"


@dataclass(frozen=True)
class OrganMembershipDTO:
    """議員が所属する（していた）機関1件."""

    organ_type: str
    name: str
    start_date: str = ""
    end_date: str | None = None
    legislature: str = ""
    organ_id: str = ""

    @property
    def type_label(self) -> str:
        return ORGAN_TYPE_LABELS.get(self.organ_type, self.organ_type)

    @property
    def period(self) -> str:
        if self.end_date:
            return f"{format_date(self.start_date)} - {format_date(self.end_date)}"
        return f"Depuis le {format_date(self.start_date)}"


@dataclass(frozen=True)
class ContactDTO:
    """連絡先1件（メール・SNS・住所など）."""

    contact_type: str
    value: str


@dataclass(frozen=True)
class RecusalDTO:
    """議員が申告した投票制限（déport）1件.

    scope は制限の範囲、target は対象（団体・案件など）。
    """

    recusal_id: str = ""
    legislator_id: str = ""
    reason: str = ""
    start_date: str = ""
    end_date: str | None = None
    scope: str = ""
    target: str = ""


@dataclass(frozen=True)
class LegislatorDetailsDTO:
    """/depute から得られる議員の完全なプロフィール."""

    legislator_id: str
    first_name: str
    last_name: str
    profession: str = "Non renseignée"
    civility: str = ""
    birth_date: str = ""
    birth_place: str = ""
    political_group: str = ""
    political_group_id: str = ""
    hatvp_url: str = ""
    organs: tuple[OrganMembershipDTO, ...] = ()
    contacts: tuple[ContactDTO, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def title(self) -> str:
        """敬称付きの氏名 (例: "Mme Marie Dupont")."""
        return f"{self.civility} {self.full_name}".strip()

    def organs_by_type(self) -> dict[str, list[OrganMembershipDTO]]:
        """機関を種別ラベルごとにまとめる（出現順）."""
        grouped: dict[str, list[OrganMembershipDTO]] = {}
        for organ in self.organs:
            grouped.setdefault(organ.type_label, []).append(organ)
        return grouped


@dataclass
class LegislatorProfileOutputDTO:
    """議員プロフィール取得の結果."""

    legislator_id: str
    details: LegislatorDetailsDTO | None = None
    recusals: list[RecusalDTO] = field(default_factory=list)
    error: bool = False
    error_message: str | None = None
