"""オープンデータAPIレスポンスをドメインの型に変換するコンバーター.

純粋な変換ロジックのみ担当。名簿系エンドポイントは提供元によって
形式が大きく異なるため、既知の形式を順に試す。
"""

from __future__ import annotations

import logging

from collections.abc import Mapping
from typing import Any

from .types import MandateRecord, OrganRecord

from src.application.dtos.group_members_dto import OrganDTO
from src.application.dtos.legislator_profile_dto import (
    ContactDTO,
    LegislatorDetailsDTO,
    OrganMembershipDTO,
    RecusalDTO,
)
from src.application.dtos.legislator_votes_dto import (
    HomonymOptionDTO,
    LegislatorBallotVoteDTO,
    LegislatorProfileDTO,
    LegislatorSearchResultDTO,
)
from src.domain.entities.legislator import Legislator
from src.domain.services.position_normalizer import PositionNormalizer
from src.domain.utils.legislator_id import (
    LEGISLATOR_ID_PREFIX,
    SLUG_ID_PREFIX,
    ensure_legislator_id_format,
)
from src.domain.utils.payload import as_list, first_present, get_path, text_value


logger = logging.getLogger(__name__)

DEFAULT_PROFESSION = "Non renseignée"
NO_RECUSAL_MESSAGE = "Aucun déport"


def _split_full_name(full_name: str) -> tuple[str, str]:
    """「名 姓...」を先頭の語とそれ以外に分ける."""
    parts = full_name.split()
    if len(parts) < 2:
        return "", full_name.strip()
    return parts[0], " ".join(parts[1:])


def _ident_names(data: Mapping[str, Any]) -> tuple[str, str]:
    """etatCivil.ident → ident → mandant → フラットな prenom/nom の順に氏名を取る."""
    for ident in (
        get_path(data, "etatCivil", "ident"),
        data.get("ident"),
        data.get("mandant"),
        data,
    ):
        if not isinstance(ident, Mapping):
            continue
        first = text_value(ident.get("prenom"))
        last = text_value(ident.get("nom"))
        if first or last:
            return first, last
    return "", ""


class OpenDataConverter:
    """オープンデータAPIレスポンスの純粋変換ロジック."""

    # --- 名簿（incremental） -------------------------------------------------

    @staticmethod
    def roster_entries(data: Any) -> list[Any]:
        """現職議員一覧レスポンスから議員エントリの配列を取り出す.

        対応形式: deputes（配列 or マップ）, acteurs.acteur, items,
        export.acteurs.acteur, export.deputes, トップレベル配列。
        """
        if isinstance(data, list):
            return data
        if not isinstance(data, Mapping):
            return []

        deputes = data.get("deputes")
        if isinstance(deputes, Mapping):
            return list(deputes.values())
        if isinstance(deputes, list):
            return deputes

        for path in (
            ("acteurs", "acteur"),
            ("items",),
            ("export", "acteurs", "acteur"),
            ("export", "deputes"),
        ):
            found = get_path(data, *path)
            if found:
                return as_list(found)

        logger.warning("未知の名簿形式です: keys=%s", list(data))
        return []

    @staticmethod
    def roster_entry_id(entry: Mapping[str, Any]) -> str:
        """名簿エントリから議員IDを取り出す.

        id_an → uid → id → mandant.uid → matricule の順。
        いずれも無く slug だけがある場合は ND 接頭辞付きのIDにする。
        """
        raw = first_present(entry, "id_an", "uid", "id", "matricule")
        if raw is None:
            raw = get_path(entry, "mandant", "uid")
        candidate = text_value(raw)
        if candidate:
            return ensure_legislator_id_format(candidate)
        slug = text_value(entry.get("slug"))
        if slug:
            return f"{SLUG_ID_PREFIX}{slug}"
        return ""

    @staticmethod
    def legislator_from_roster_entry(
        entry: Any, legislature: str
    ) -> Legislator | None:
        """名簿エントリ1件を Legislator に変換する。IDが無ければ None."""
        if not isinstance(entry, Mapping):
            return None
        nested = entry.get("depute")
        data: Mapping[str, Any] = nested if isinstance(nested, Mapping) else entry

        legislator_id = OpenDataConverter.roster_entry_id(data) or (
            OpenDataConverter.roster_entry_id(entry) if data is not entry else ""
        )
        if not legislator_id:
            return None

        first, last = _ident_names(data)
        family_name = text_value(data.get("nom_de_famille"))
        if family_name:
            last = family_name
        if not first:
            full_name = text_value(data.get("nom_complet"))
            if full_name:
                first, rest = _split_full_name(full_name)
                last = last or rest
            elif " " in last:
                first, last = _split_full_name(last)

        group_name, group_id = OpenDataConverter._roster_group(data)
        profession = text_value(
            first_present(data, "profession", "profession_declaree")
        )
        return Legislator(
            legislator_id=legislator_id,
            first_name=first,
            last_name=last,
            legislature=legislature,
            political_group=group_name or None,
            political_group_id=group_id or None,
            profession=profession or None,
        )

    @staticmethod
    def _roster_group(data: Mapping[str, Any]) -> tuple[str, str]:
        group = data.get("groupe")
        if isinstance(group, Mapping):
            return text_value(group.get("libelle")), text_value(group.get("code"))
        if isinstance(group, str) and group:
            return group, ""
        political = data.get("groupePolitique")
        if isinstance(political, Mapping):
            return (
                text_value(political.get("organeName")),
                text_value(political.get("organeRef")),
            )
        sigle = text_value(data.get("groupe_sigle"))
        return sigle, sigle

    # --- 名簿（full roster: organes + acteurs） -------------------------------

    @staticmethod
    def organ_records(data: Any) -> list[OrganRecord]:
        """organes 一覧レスポンスを OrganRecord の列に変換する."""
        if isinstance(data, Mapping):
            entries = (
                get_path(data, "organes", "organe")
                or get_path(data, "export", "organes", "organe")
                or data.get("organes")
                or data.get("items")
            )
        else:
            entries = data
        records: list[OrganRecord] = []
        for entry in as_list(entries):
            if not isinstance(entry, Mapping):
                continue
            uid = text_value(entry.get("uid"))
            if not uid:
                continue
            records.append(
                OrganRecord(
                    uid=uid,
                    code_type=text_value(
                        first_present(entry, "codeType", "typeOrgane")
                    ),
                    name=text_value(first_present(entry, "libelle", "libelleEdition")),
                    short_name=text_value(entry.get("libelleAbrege")),
                    legislature=text_value(entry.get("legislature")),
                    end_date=text_value(
                        get_path(entry, "viMoDe", "dateFin") or entry.get("dateFin")
                    )
                    or None,
                )
            )
        return records

    @staticmethod
    def political_groups(organs: list[OrganRecord]) -> dict[str, OrganRecord]:
        """機関一覧から会派 (codeType == GP) だけを ID → レコードで返す."""
        return {organ.uid: organ for organ in organs if organ.is_political_group}

    @staticmethod
    def actor_entries(data: Any) -> list[Any]:
        """acteurs 一覧レスポンスからアクターの配列を取り出す."""
        if isinstance(data, Mapping):
            return as_list(
                get_path(data, "acteurs", "acteur")
                or get_path(data, "export", "acteurs", "acteur")
                or data.get("acteurs")
                or data.get("items")
            )
        return as_list(data)

    @staticmethod
    def mandates_of(actor: Mapping[str, Any]) -> list[MandateRecord]:
        """アクターの mandats.mandat を MandateRecord の列にする."""
        mandates: list[MandateRecord] = []
        for mandate in as_list(get_path(actor, "mandats", "mandat")):
            if not isinstance(mandate, Mapping):
                continue
            organ_id = text_value(get_path(mandate, "organes", "organeRef"))
            if not organ_id:
                continue
            mandates.append(
                MandateRecord(
                    organ_id=organ_id,
                    organ_type=text_value(mandate.get("typeOrgane")),
                    legislature=text_value(mandate.get("legislature")),
                    start_date=text_value(mandate.get("dateDebut")),
                    end_date=text_value(mandate.get("dateFin")) or None,
                )
            )
        return mandates

    @staticmethod
    def current_group(
        actor: Mapping[str, Any], groups: dict[str, OrganRecord]
    ) -> OrganRecord | None:
        """アクターの現在の所属会派を返す.

        終了日のない任期のうち、会派一覧に含まれる機関を採用する。
        複数あれば開始日が最も新しいもの。
        """
        current = [
            mandate
            for mandate in OpenDataConverter.mandates_of(actor)
            if mandate.is_current and mandate.organ_id in groups
        ]
        if not current:
            return None
        latest = max(current, key=lambda mandate: mandate.start_date)
        return groups[latest.organ_id]

    @staticmethod
    def legislator_from_actor(
        actor: Any, legislature: str, groups: dict[str, OrganRecord]
    ) -> Legislator | None:
        """アクター1件を会派情報付きの Legislator に変換する."""
        if not isinstance(actor, Mapping):
            return None
        legislator_id = ensure_legislator_id_format(text_value(actor.get("uid")))
        if not legislator_id:
            return None
        first, last = _ident_names(actor)
        group = OpenDataConverter.current_group(actor, groups)
        profession = text_value(
            get_path(actor, "profession", "libelleCourant") or actor.get("profession")
        )
        return Legislator(
            legislator_id=legislator_id,
            first_name=first,
            last_name=last,
            legislature=legislature,
            political_group=group.name if group else None,
            political_group_id=group.uid if group else None,
            profession=profession or None,
        )

    @staticmethod
    def full_roster(
        organs_data: Any, actors_data: Any, legislature: str
    ) -> list[Legislator]:
        """organes と acteurs を突き合わせて名簿を組み立てる."""
        groups = OpenDataConverter.political_groups(
            OpenDataConverter.organ_records(organs_data)
        )
        legislators = [
            legislator
            for legislator in (
                OpenDataConverter.legislator_from_actor(actor, legislature, groups)
                for actor in OpenDataConverter.actor_entries(actors_data)
            )
            if legislator is not None
        ]
        logger.info(
            "名簿を構築しました: legislators=%d, groups=%d",
            len(legislators),
            len(groups),
        )
        return legislators

    # --- 議員詳細・検索 -------------------------------------------------------

    @staticmethod
    def legislator_from_detail(
        data: Any, legislature: str, fallback_id: str = ""
    ) -> Legislator | None:
        """/depute のレスポンスを Legislator に変換する."""
        if not isinstance(data, Mapping):
            return None
        first, last = _ident_names(data)
        legislator_id = ensure_legislator_id_format(
            text_value(first_present(data, "id", "uid")) or fallback_id
        )
        if not legislator_id:
            return None

        group_id = text_value(data.get("groupe_politique_uid"))
        if not group_id:
            for mandate in OpenDataConverter.mandates_of(data):
                if mandate.organ_id.startswith("PO") and mandate.organ_type == "GP":
                    group_id = mandate.organ_id
                    break

        return Legislator(
            legislator_id=legislator_id,
            first_name=first,
            last_name=last,
            legislature=legislature,
            political_group=text_value(data.get("groupe_politique")) or None,
            political_group_id=group_id or None,
            profession=text_value(data.get("profession")) or None,
        )

    @staticmethod
    def search_result(data: Any) -> LegislatorSearchResultDTO:
        """/depute 検索レスポンスを検索結果DTOに変換する."""
        if not isinstance(data, Mapping):
            return LegislatorSearchResultDTO()

        if data.get("error") and data.get("options"):
            options = [
                HomonymOptionDTO(
                    legislator_id=ensure_legislator_id_format(
                        text_value(option.get("id"))
                    ),
                    first_name=text_value(option.get("prenom")),
                    last_name=text_value(option.get("nom")),
                )
                for option in as_list(data.get("options"))
                if isinstance(option, Mapping)
            ]
            return LegislatorSearchResultDTO(options=options)

        first, last = _ident_names(data)
        legislator_id = ensure_legislator_id_format(
            text_value(first_present(data, "id", "uid"))
        )
        if not legislator_id:
            return LegislatorSearchResultDTO()
        profession = text_value(data.get("profession")) or DEFAULT_PROFESSION
        return LegislatorSearchResultDTO(
            legislator=LegislatorProfileDTO(
                legislator_id=legislator_id,
                first_name=first,
                last_name=last,
                profession=profession,
            )
        )

    @staticmethod
    def ballot_votes(data: Any) -> list[LegislatorBallotVoteDTO]:
        """/votes の行配列を投票履歴DTOの列に変換する."""
        votes: list[LegislatorBallotVoteDTO] = []
        for row in as_list(data):
            if not isinstance(row, Mapping):
                continue
            votes.append(
                LegislatorBallotVoteDTO(
                    number=text_value(row.get("numero")),
                    date=text_value(first_present(row, "date", "dateScrutin")),
                    title=text_value(first_present(row, "titre", "title")),
                    position=PositionNormalizer.normalize(row.get("position")),
                )
            )
        return votes

    @staticmethod
    def organ(data: Any) -> OrganDTO | None:
        """/organes?organe_id のレスポンスを OrganDTO に変換する."""
        if not isinstance(data, Mapping):
            return None
        organ_id = text_value(data.get("uid"))
        if not organ_id:
            return None
        member_ids: list[str] = []
        for member in as_list(data.get("membres")):
            raw = member.get("uid") if isinstance(member, Mapping) else member
            member_id = ensure_legislator_id_format(text_value(raw))
            if (
                member_id.startswith(LEGISLATOR_ID_PREFIX)
                and member_id not in member_ids
            ):
                member_ids.append(member_id)
        return OrganDTO(
            organ_id=organ_id,
            name=text_value(data.get("libelle")),
            legislature=text_value(data.get("legislature")),
            start_date=text_value(data.get("dateDebut")),
            end_date=text_value(data.get("dateFin")) or None,
            organ_type=text_value(data.get("typeOrgane")),
            member_ids=tuple(member_ids),
        )

    # --- 議員プロフィール・投票制限 -------------------------------------------

    @staticmethod
    def legislator_details(
        data: Any, fallback_id: str = ""
    ) -> LegislatorDetailsDTO | None:
        """/depute のレスポンスを完全なプロフィールDTOに変換する."""
        if not isinstance(data, Mapping):
            return None
        legislator_id = ensure_legislator_id_format(
            text_value(first_present(data, "id", "uid")) or fallback_id
        )
        if not legislator_id:
            return None
        first, last = _ident_names(data)
        organs = tuple(
            OrganMembershipDTO(
                organ_type=text_value(organ.get("type")),
                name=text_value(organ.get("nom")),
                start_date=text_value(organ.get("date_debut")),
                end_date=text_value(organ.get("date_fin")) or None,
                legislature=text_value(organ.get("legislature")),
                organ_id=text_value(organ.get("uid")),
            )
            for organ in as_list(data.get("organes"))
            if isinstance(organ, Mapping)
        )
        contacts = tuple(
            ContactDTO(
                contact_type=text_value(contact.get("type")),
                value=text_value(contact.get("valeur")),
            )
            for contact in as_list(data.get("contacts"))
            if isinstance(contact, Mapping) and text_value(contact.get("valeur"))
        )
        return LegislatorDetailsDTO(
            legislator_id=legislator_id,
            first_name=first,
            last_name=last,
            profession=text_value(data.get("profession")) or DEFAULT_PROFESSION,
            civility=text_value(data.get("civilite")),
            birth_date=text_value(data.get("date_naissance")),
            birth_place=text_value(data.get("lieu_naissance")),
            political_group=text_value(data.get("groupe_politique")),
            political_group_id=text_value(data.get("groupe_politique_uid")),
            hatvp_url=text_value(data.get("hatvp_url")),
            organs=organs,
            contacts=contacts,
        )

    @staticmethod
    def recusals(data: Any) -> list[RecusalDTO]:
        """/deports のレスポンスを投票制限DTOの列に変換する.

        「Aucun déport」のメッセージや配列以外の応答は空リストになる。
        """
        if isinstance(data, Mapping):
            message = text_value(data.get("message"))
            if NO_RECUSAL_MESSAGE in message:
                return []
            entries = data.get("deports")
        else:
            entries = data
        if not isinstance(entries, list):
            if entries is not None:
                logger.warning("未知の投票制限形式です: type=%s", type(entries).__name__)
            return []

        recusals: list[RecusalDTO] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            legislator_id = text_value(first_present(entry, "deputeId", "refActeur"))
            recusals.append(
                RecusalDTO(
                    recusal_id=text_value(entry.get("id")),
                    legislator_id=ensure_legislator_id_format(legislator_id),
                    reason=text_value(entry.get("motif")),
                    start_date=text_value(entry.get("dateDebut")),
                    end_date=text_value(entry.get("dateFin")) or None,
                    scope=text_value(entry.get("portee")),
                    target=text_value(entry.get("cible")),
                )
            )
        return recusals
