"""Unit tests for the CSV parser and clue record normalization in trivia_utils.py"""
import csv
import io
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trivia_utils import (build_board_clues, build_clue_list, column_index, extract_clues,
                          normalize_value, parse_csv)

HEADER = ["Show Number", " Air Date", " Round", " Category", " Value", " Question", " Answer"]


def to_csv(rows):
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(rows)
    return out.getvalue()


class TestParseCsv:
    """Test cases for parse_csv function."""

    def test_empty_input(self):
        assert parse_csv("") == []

    def test_none_input(self):
        assert parse_csv(None) == []

    def test_quoted_comma_and_escaped_quote(self):
        assert parse_csv('a,"b,c""d",e\n') == [["a", 'b,c"d', "e"]]

    def test_no_trailing_newline(self):
        assert parse_csv("a,b\nc,d") == [["a", "b"], ["c", "d"]]

    def test_crlf_line_endings(self):
        assert parse_csv("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]

    def test_empty_fields(self):
        assert parse_csv(",,\n") == [["", "", ""]]
        assert parse_csv("a,,c\n") == [["a", "", "c"]]

    def test_trailing_comma_at_eof(self):
        assert parse_csv("a,") == [["a", ""]]

    def test_blank_line_is_single_empty_field(self):
        assert parse_csv("a\n\nb\n") == [["a"], [""], ["b"]]

    def test_embedded_newline_in_quotes(self):
        assert parse_csv('x,"line one\nline two"\n') == [["x", "line one\nline two"]]

    def test_carriage_return_kept_inside_quotes(self):
        assert parse_csv('"a\r\nb"\n') == [["a\r\nb"]]

    def test_quote_in_middle_of_field(self):
        # quote opens quoted mode even mid-field and is not kept
        assert parse_csv('ab"c,d"e\n') == [["abc,de"]]

    def test_unterminated_quote_runs_to_end(self):
        assert parse_csv('a,"unterminated, still\ngoing') == [["a", "unterminated, still\ngoing"]]

    def test_round_trip_with_standard_quoting(self):
        rows = [
            ["Category", "Question", "Answer"],
            ["QUOTES", 'He said "hi", then left', 'the "Boss"'],
            ["MULTI,LINE", "first\nsecond\nthird", ""],
            ["", "   padded   ", '""'],
            ["CRLF", "one\r\ntwo", "x"],
        ]
        assert parse_csv(to_csv(rows)) == rows


class TestNormalizeValue:
    """Test cases for normalize_value function."""

    def test_dollar_and_thousands(self):
        assert normalize_value("$1,000") == 1000

    def test_plain_integer(self):
        assert normalize_value("800") == 800

    def test_dollar_prefix(self):
        assert normalize_value("$200") == 200

    def test_empty_and_none(self):
        assert normalize_value("") is None
        assert normalize_value(None) is None

    def test_not_a_number(self):
        assert normalize_value("abc") is None
        assert normalize_value("None") is None

    def test_noise_is_not_stripped(self):
        assert normalize_value("$200 (DD)") is None
        assert normalize_value("12abc") is None
        assert normalize_value("1.5") is None
        assert normalize_value("1_000") is None

    def test_only_symbols(self):
        assert normalize_value("$,") is None


class TestRecordNormalizer:
    """Test cases for clue extraction and the two filtering profiles."""

    rows = [
        HEADER,
        ["1", "2004-12-31", "Jeopardy!", "HISTORY", "$200", "Q1", "A1"],
        ["1", "2004-12-31", "Jeopardy!", "HISTORY", "None", "Q2", "A2"],
        ["1", "2004-12-31", "Double Jeopardy!", "HISTORY", "$400", "Q3", "A3"],
        ["1", "2004-12-31", "Jeopardy!", "", "$600", "Q4", "A4"],
        ["1", "2004-12-31", "Jeopardy!", "SCIENCE", "$800", "Q5", ""],
        ["1", "2004-12-31", "Jeopardy!", "SCIENCE"],
    ]

    def test_column_index_trims_names(self):
        cols = column_index(HEADER)
        assert cols["Category"] == 3
        assert cols["Air Date"] == 1

    def test_extract_fields(self):
        clues = extract_clues(self.rows)
        assert len(clues) == 6
        assert clues[0] == {"category": "HISTORY", "value": 200, "question": "Q1",
                            "answer": "A1", "round": "Jeopardy!"}
        assert clues[1]["value"] is None

    def test_short_row_reads_none(self):
        last = extract_clues(self.rows)[-1]
        assert last["category"] == "SCIENCE"
        assert last["value"] is None
        assert last["question"] is None

    def test_column_order_is_irrelevant(self):
        rows = [["Answer", "Round", "Question", "Value", "Category"],
                ["A1", "Jeopardy!", "Q1", "$1,000", "ART"]]
        assert extract_clues(rows) == [{"category": "ART", "value": 1000, "question": "Q1",
                                        "answer": "A1", "round": "Jeopardy!"}]

    def test_missing_columns(self):
        rows = [["Category", "Question", "Answer"], ["ART", "Q", "A"]]
        clue = extract_clues(rows)[0]
        assert clue["value"] is None
        assert clue["round"] is None
        assert build_clue_list(rows) == [clue]
        assert build_board_clues(rows) == []

    def test_header_only_and_empty(self):
        assert extract_clues([]) == []
        assert extract_clues([HEADER]) == []

    def test_repository_profile(self):
        clues = build_clue_list(self.rows)
        assert [c["question"] for c in clues] == ["Q1", "Q2", "Q3"]

    def test_board_profile(self):
        clues = build_board_clues(self.rows)
        assert [c["question"] for c in clues] == ["Q1"]

    def test_board_profile_other_round(self):
        clues = build_board_clues(self.rows, round_name="Double Jeopardy!")
        assert [c["question"] for c in clues] == ["Q3"]

    def test_answer_markup_is_kept(self):
        rows = [["Category", "Question", "Answer"], ["ART", "Q", "<i>Mona Lisa</i>"]]
        assert build_clue_list(rows)[0]["answer"] == "<i>Mona Lisa</i>"

    def test_idempotent(self):
        assert build_clue_list(self.rows) == build_clue_list(self.rows)
        assert build_board_clues(self.rows) == build_board_clues(self.rows)


def run_tests():
    """Run all tests and print results."""
    import traceback

    test_classes = [TestParseCsv, TestNormalizeValue, TestRecordNormalizer]
    total_tests = 0
    passed_tests = 0
    failed_tests = []

    for test_class in test_classes:
        instance = test_class()
        for method_name in dir(instance):
            if method_name.startswith('test_'):
                total_tests += 1
                try:
                    getattr(instance, method_name)()
                    passed_tests += 1
                    print(f"✅ {test_class.__name__}.{method_name}")
                except AssertionError as e:
                    failed_tests.append((test_class.__name__, method_name, str(e)))
                    print(f"❌ {test_class.__name__}.{method_name}: {e}")
                except Exception as e:
                    failed_tests.append((test_class.__name__, method_name, traceback.format_exc()))
                    print(f"💥 {test_class.__name__}.{method_name}: {e}")

    print(f"\n{'='*50}")
    print(f"Results: {passed_tests}/{total_tests} passed")

    if failed_tests:
        print("\nFailed tests:")
        for cls, method, error in failed_tests:
            print(f"  - {cls}.{method}")
        return 1

    return 0


if __name__ == "__main__":
    exit(run_tests())
