"""Tests for partial date formatting."""

import pytest

from resume_builder.formatting.dates import PRESENT, format_date_range, format_partial_date


class TestFormatPartialDate:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2021-03", "Mar 2021"),
            ("2020-12", "Dec 2020"),
            ("1999-1", "Jan 1999"),
            (" 2022-07 ", "Jul 2022"),
        ],
    )
    def test_valid(self, raw, expected):
        assert format_partial_date(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "2021", "March 2021", "2021/03", "21-03", "2021-03-01"])
    def test_invalid_is_empty(self, raw):
        assert format_partial_date(raw) == ""

    def test_month_overflow_rolls_into_next_year(self):
        assert format_partial_date("2021-13") == "Jan 2022"

    def test_month_zero_rolls_into_previous_year(self):
        assert format_partial_date("2021-00") == "Dec 2020"


class TestFormatDateRange:
    def test_start_and_end(self):
        assert format_date_range("2018-01", "2021-02") == "Jan 2018 - Feb 2021"

    def test_current_ignores_end(self):
        assert format_date_range("2021-03", "2022-01", current=True) == f"Mar 2021 - {PRESENT}"

    def test_missing_end(self):
        assert format_date_range("2021-03", "") == "Mar 2021 - "

    def test_missing_both(self):
        assert format_date_range("", None) == " - "
