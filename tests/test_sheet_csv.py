"""Tests for turning published sheet CSV into a top-4 ranking."""

import pytest

from conftest import sheet_csv
from sheet_leaderboard.config import ColumnLayout
from sheet_leaderboard.core.models import Entry
from sheet_leaderboard.fetch.sheet_csv import parse_score, process_sheet_data, split_rows


def _pairs(ranking: list[Entry]) -> list[tuple[str, float]]:
    return [(e.name, e.score) for e in ranking]


class TestProcessSheetData:
    """Parser contract: filtering, score defaults, ordering, truncation."""

    def test_basic_scenario(self) -> None:
        ranking = process_sheet_data("Alice,,,,,,,,10\nBob,,,,,,,,5\n")
        assert _pairs(ranking) == [("Alice", 10.0), ("Bob", 5.0)]

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("", id="empty"),
            pytest.param("   \n\n", id="blank"),
            pytest.param(None, id="none"),
            pytest.param(42, id="not_a_string"),
        ],
    )
    def test_no_input_gives_empty_ranking(self, text) -> None:
        assert process_sheet_data(text) == []

    def test_keeps_top_four_descending(self) -> None:
        text = sheet_csv(("a", "3"), ("b", "9"), ("c", "1"), ("d", "7"), ("e", "5"), ("f", "11"))
        ranking = process_sheet_data(text)
        assert _pairs(ranking) == [("f", 11.0), ("b", 9.0), ("d", 7.0), ("e", 5.0)]

    def test_fewer_than_four_rows(self) -> None:
        ranking = process_sheet_data(sheet_csv(("solo", "1")))
        assert _pairs(ranking) == [("solo", 1.0)]

    def test_all_zero_keeps_row_order(self) -> None:
        text = sheet_csv(("w", "0"), ("x", ""), ("y", "0"), ("z", "n/a"), ("late", "0"))
        assert [e.name for e in process_sheet_data(text)] == ["w", "x", "y", "z"]

    def test_ties_keep_row_order(self) -> None:
        text = sheet_csv(("first", "5"), ("top", "9"), ("second", "5"))
        assert [e.name for e in process_sheet_data(text)] == ["top", "first", "second"]

    def test_empty_name_is_dropped_even_with_valid_score(self) -> None:
        text = sheet_csv(("", "99"), ("   ", "98"), ("kept", "1"))
        assert _pairs(process_sheet_data(text)) == [("kept", 1.0)]

    def test_invalid_score_defaults_to_zero(self) -> None:
        text = sheet_csv(("good", "4"), ("bad", "abc"))
        assert _pairs(process_sheet_data(text)) == [("good", 4.0), ("bad", 0.0)]

    def test_short_rows_are_dropped(self) -> None:
        text = "short,1,2\nfull,,,,,,,,6\n"
        assert _pairs(process_sheet_data(text)) == [("full", 6.0)]

    def test_quotes_are_stripped(self) -> None:
        text = '"Alice","","","","","","","","12.5"\r\n"Bob","","","","","","","","3"'
        assert _pairs(process_sheet_data(text)) == [("Alice", 12.5), ("Bob", 3.0)]

    def test_score_column_is_configurable(self) -> None:
        layout = ColumnLayout(name_index=0, score_index=12)
        text = sheet_csv(("late", "2"), ("early", "20"), score_index=12)
        assert _pairs(process_sheet_data(text, layout)) == [("early", 20.0), ("late", 2.0)]
        # The default layout reads column 8, which is blank here
        assert _pairs(process_sheet_data(text)) == [("late", 0.0), ("early", 0.0)]

    def test_idempotent(self) -> None:
        text = sheet_csv(("a", "1"), ("b", "2"), ("c", "x"))
        assert process_sheet_data(text) == process_sheet_data(text)

    def test_limit(self) -> None:
        text = sheet_csv(("a", "1"), ("b", "2"), ("c", "3"))
        assert [e.name for e in process_sheet_data(text, limit=2)] == ["c", "b"]


class TestParseScore:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            pytest.param("10", 10.0, id="int"),
            pytest.param(" 7.25 ", 7.25, id="padded_float"),
            pytest.param("-3", -3.0, id="negative"),
            pytest.param("12pts", 12.0, id="numeric_prefix"),
            pytest.param(".5", 0.5, id="leading_dot"),
            pytest.param("1e2", 100.0, id="exponent"),
            pytest.param("", 0.0, id="empty"),
            pytest.param("abc", 0.0, id="text"),
            pytest.param("nan", 0.0, id="nan_text"),
            pytest.param(None, 0.0, id="none"),
        ],
    )
    def test_parse(self, raw, expected: float) -> None:
        assert parse_score(raw) == expected


class TestSplitRows:
    def test_trims_and_splits(self) -> None:
        assert split_rows('\n"a","b"\r\nc,d\n') == [["a", "b"], ["c", "d"]]

    def test_empty_after_quotes(self) -> None:
        assert split_rows('""') == []
