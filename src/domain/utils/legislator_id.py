"""議員IDの正規化ユーティリティ."""

import re


LEGISLATOR_ID_PREFIX = "PA"
# NosDéputés 由来のスラッグIDに付与される接頭辞
SLUG_ID_PREFIX = "ND"

_LEGISLATOR_ID_PATTERN = re.compile(r"^PA\d+$", re.IGNORECASE)


def ensure_legislator_id_format(raw_id: str | int | None) -> str:
    """議員IDを正規形 (PA + 数字) に揃える.

    例: "1234" → "PA1234", " pa1234 " → "PA1234", "ND jean-dupont" はそのまま。
    空の場合は空文字を返す。
    """
    if raw_id is None:
        return ""
    cleaned = str(raw_id).strip()
    if not cleaned:
        return ""
    upper = cleaned.upper()
    if upper.startswith(SLUG_ID_PREFIX):
        return cleaned
    if upper.startswith(LEGISLATOR_ID_PREFIX):
        return LEGISLATOR_ID_PREFIX + cleaned[len(LEGISLATOR_ID_PREFIX) :]
    return f"{LEGISLATOR_ID_PREFIX}{cleaned}"


def is_legislator_id(value: str) -> bool:
    """PA + 数字 の形式かどうか（大文字小文字は区別しない）."""
    return bool(_LEGISLATOR_ID_PATTERN.match(value.strip()))


def numeric_suffix(legislator_id: str) -> str:
    """ID から接頭辞を除いた部分を返す (PA1234 → 1234)."""
    canonical = ensure_legislator_id_format(legislator_id)
    if canonical.startswith(LEGISLATOR_ID_PREFIX):
        return canonical[len(LEGISLATOR_ID_PREFIX) :]
    return canonical
