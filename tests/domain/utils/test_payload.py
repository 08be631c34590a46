"""ペイロード読み取りヘルパーのテスト."""

from src.domain.utils.payload import (
    as_list,
    first_present,
    get_path,
    text_value,
    to_int,
)


class TestAsList:
    def test_wraps_single_value(self) -> None:
        assert as_list({"a": 1}) == [{"a": 1}]

    def test_none_is_empty(self) -> None:
        assert as_list(None) == []

    def test_list_is_returned_as_is(self) -> None:
        items = [1, 2]
        assert as_list(items) is items


class TestGetPath:
    def test_nested_lookup(self) -> None:
        assert get_path({"a": {"b": {"c": 3}}}, "a", "b", "c") == 3

    def test_missing_key_returns_none(self) -> None:
        assert get_path({"a": {}}, "a", "b", "c") is None
        assert get_path({"a": [1]}, "a", "b") is None


class TestTextValue:
    def test_text_node(self) -> None:
        assert text_value({"#text": " PA1 "}) == "PA1"

    def test_plain_values(self) -> None:
        assert text_value("x") == "x"
        assert text_value(12) == "12"
        assert text_value(None) == ""
        assert text_value(True) == ""


class TestToInt:
    def test_lenient_parsing(self) -> None:
        assert to_int("12") == 12
        assert to_int("12.0") == 12
        assert to_int(7) == 7

    def test_invalid_and_negative_are_zero(self) -> None:
        assert to_int("abc") == 0
        assert to_int(-3) == 0
        assert to_int(None) == 0
        assert to_int(True) == 0


class TestFirstPresent:
    def test_skips_falsy_values(self) -> None:
        assert first_present({"a": "", "b": "x"}, "a", "b") == "x"
        assert first_present({}, "a") is None
