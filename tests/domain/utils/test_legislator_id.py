"""議員ID正規化のテスト."""

import pytest

from src.domain.utils.legislator_id import (
    ensure_legislator_id_format,
    is_legislator_id,
    numeric_suffix,
)


class TestEnsureLegislatorIdFormat:
    """ensure_legislator_id_format のテスト."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1234", "PA1234"),
            ("PA1234", "PA1234"),
            (" pa1234 ", "PA1234"),
            ("Pa795", "PA795"),
            (1234, "PA1234"),
        ],
    )
    def test_canonical_form(self, raw, expected) -> None:
        assert ensure_legislator_id_format(raw) == expected

    def test_empty_values(self) -> None:
        """空・None は空文字."""
        assert ensure_legislator_id_format(None) == ""
        assert ensure_legislator_id_format("") == ""
        assert ensure_legislator_id_format("   ") == ""

    def test_slug_ids_are_kept(self) -> None:
        """NosDéputés 由来の ND スラッグはそのまま."""
        assert ensure_legislator_id_format("NDjean-dupont") == "NDjean-dupont"

    def test_idempotent(self) -> None:
        once = ensure_legislator_id_format("1234")
        assert ensure_legislator_id_format(once) == once


class TestIsLegislatorId:
    """is_legislator_id のテスト."""

    def test_accepts_prefixed_digits(self) -> None:
        assert is_legislator_id("PA1234")
        assert is_legislator_id(" pa1234 ")

    def test_rejects_names_and_bare_digits(self) -> None:
        assert not is_legislator_id("Dupont")
        assert not is_legislator_id("1234")
        assert not is_legislator_id("PA12a")


class TestNumericSuffix:
    """numeric_suffix のテスト."""

    def test_strips_prefix(self) -> None:
        assert numeric_suffix("PA1234") == "1234"
        assert numeric_suffix("1234") == "1234"
