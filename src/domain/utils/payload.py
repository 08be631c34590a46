"""形の定まらないAPIペイロードを読むための小さなヘルパー群.

いずれも例外を投げず、想定外の形にはデフォルト値を返す。
"""

from collections.abc import Mapping
from typing import Any


TEXT_NODE_KEY = "#text"


def as_list(value: Any) -> list[Any]:
    """単一要素を1要素リストに、None を空リストに揃える."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def get_path(data: Any, *keys: str) -> Any:
    """ネストした Mapping をキー列で辿る。途中で欠けたら None."""
    current = data
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def text_value(value: Any) -> str:
    """文字列・#textノード・value フィールドから文字列を取り出す."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, Mapping):
        for key in (TEXT_NODE_KEY, "value", "libelleCourant"):
            if key in value:
                return text_value(value[key])
    return ""


def to_int(value: Any) -> int:
    """数値文字列を寛容に int 化する。負値と解釈不能値は0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0
        try:
            return max(int(float(stripped)), 0)
        except ValueError:
            return 0
    return 0


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """最初に truthy な値を持つキーの値を返す."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None
