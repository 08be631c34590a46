"""国民議会オープンデータAPIのレスポンス型定義."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# APIのJSONは形が一定しないため、生データはこの型で受け渡す
JsonPayload = dict[str, Any]

POLITICAL_GROUP_CODE = "GP"


@dataclass(frozen=True)
class OrganRecord:
    """organes 一覧の1レコード."""

    uid: str
    code_type: str
    name: str
    short_name: str = ""
    legislature: str = ""
    end_date: str | None = None

    @property
    def is_political_group(self) -> bool:
        return self.code_type == POLITICAL_GROUP_CODE


@dataclass(frozen=True)
class MandateRecord:
    """acteur の mandats に含まれる1件の任期."""

    organ_id: str
    organ_type: str
    legislature: str = ""
    start_date: str = ""
    end_date: str | None = None

    @property
    def is_current(self) -> bool:
        return not self.end_date
