"""Tests for bk_common.cents."""

from src.bk_common.cents import cents_to_display


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(57500) == "$575.00"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "$0.00"

    def test_one_cent(self) -> None:
        assert cents_to_display(1) == "$0.01"

    def test_thousands_separator(self) -> None:
        assert cents_to_display(260000) == "$2,600.00"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-$12.00"
