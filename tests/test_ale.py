import pytest

from ale2cdl.ale import (
    SKIP_COLUMN_COUNT,
    SKIP_MISSING_VALUE,
    locate_header_line,
    parse_ale_content,
    parse_ale_document,
    split_lines,
)
from ale2cdl.errors import ErrorKind, ValidationError

HEADER = "Name\tASC_SOP\tASC_SAT"

SOP = "(1 1 1)(0 0 0)(1 1 1)"


def test_split_lines_handles_crlf():
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]


def test_locate_header_skips_blank_and_comment_lines():
    lines = ["Heading", "Column", "", "# columns follow", "  " + HEADER + "  ", "Data"]
    assert locate_header_line(lines) == HEADER


def test_locate_header_without_column_marker():
    assert locate_header_line(["Heading", HEADER, "Data"]) is None


def test_locate_header_window_limit():
    lines = ["Column"] + [""] * 18 + [HEADER]
    assert locate_header_line(lines) == HEADER

    lines = ["Column"] + [""] * 19 + [HEADER]
    assert locate_header_line(lines) is None


def test_locate_header_stops_at_first_marker():
    lines = ["Column", "", "# nothing here", "Column", HEADER]
    # second marker line is itself the first candidate
    assert locate_header_line(lines) == "Column"

    lines = ["Column"] + ["#"] * 25 + ["Column", HEADER]
    assert locate_header_line(lines) is None


def test_records_in_row_order(ale_text):
    records = parse_ale_content(ale_text)
    assert [r.Name for r in records] == ["A001C001.mov", "A001C002.mov"]
    assert records[1].ASC_SOP == SOP
    assert records[1].ASC_SAT == "1.0"


def test_crlf_document(make_ale):
    text = make_ale(rows=["Shot1\t" + SOP + "\t1.0"], newline="\r\n")
    assert parse_ale_content(text)[0].ASC_SAT == "1.0"


def test_extra_columns_any_order(make_ale):
    text = make_ale(
        header="Tape\tASC_SAT\tName\tASC_SOP",
        rows=["T1\t0.8\tShot_01\t" + SOP],
    )
    record = parse_ale_content(text)[0]
    assert record.Name == "Shot_01"
    assert record.ASC_SAT == "0.8"


@pytest.mark.parametrize("header,missing", [
    ("ASC_SOP\tASC_SAT", ["Name"]),
    ("Name\tASC_SAT", ["ASC_SOP"]),
    ("Name\tASC_SOP", ["ASC_SAT"]),
    ("Name\tTape", ["ASC_SOP", "ASC_SAT"]),
    ("Tape\tStart", ["Name", "ASC_SOP", "ASC_SAT"]),
    ("name\tasc_sop\tasc_sat", ["Name", "ASC_SOP", "ASC_SAT"]),
])
def test_missing_required_columns(make_ale, header, missing):
    with pytest.raises(ValidationError) as exc_info:
        parse_ale_content(make_ale(header=header, rows=["a\tb\tc"]))

    assert exc_info.value.kind == ErrorKind.MISSING_REQUIRED_COLUMNS
    assert exc_info.value.missing_columns == missing
    assert ", ".join(missing) in exc_info.value.message


def test_missing_header_section():
    with pytest.raises(ValidationError) as exc_info:
        parse_ale_content("Heading\nData\nShot1\t" + SOP + "\t1.0\n")
    assert exc_info.value.kind == ErrorKind.MISSING_HEADER_SECTION


def test_column_count_mismatch_dropped(make_ale):
    text = make_ale(rows=[
        "Shot1\t" + SOP + "\t1.0",
        "Shot2\t" + SOP,
        "Shot3\t" + SOP + "\t1.0\textra",
        "Shot4\t" + SOP + "\t1.1",
    ])
    document = parse_ale_document(text)

    assert [r.Name for r in document.records] == ["Shot1", "Shot4"]
    assert [row.skip_reason for row in document.skipped] == [SKIP_COLUMN_COUNT] * 2


def test_empty_required_value_dropped(make_ale):
    text = make_ale(
        header="Name\tTape\tASC_SOP\tASC_SAT",
        rows=[
            "Shot1\tT1\t \t1.0",
            "Shot2\tT1\t" + SOP + "\t1.0",
        ],
    )
    document = parse_ale_document(text)

    assert [r.Name for r in document.records] == ["Shot2"]
    assert document.skipped[0].skip_reason == SKIP_MISSING_VALUE


def test_comments_and_blank_lines_in_data(make_ale):
    text = make_ale(rows=["", "# a comment", "Shot1\t" + SOP + "\t1.0", "   "])
    assert len(parse_ale_content(text)) == 1


def test_no_data_marker(make_ale):
    with pytest.raises(ValidationError) as exc_info:
        parse_ale_content(make_ale(rows=["Shot1\t" + SOP + "\t1.0"], data_marker=False))
    assert exc_info.value.kind == ErrorKind.NO_VALID_RECORDS


def test_data_section_only_comments(make_ale):
    with pytest.raises(ValidationError) as exc_info:
        parse_ale_content(make_ale(rows=["", "# nothing", ""]))
    assert exc_info.value.kind == ErrorKind.NO_VALID_RECORDS


def test_unexpected_failure_is_normalized():
    with pytest.raises(ValidationError) as exc_info:
        parse_ale_content(None)
    assert exc_info.value.kind == ErrorKind.MALFORMED_INPUT
    assert exc_info.value.message == "invalid input format"
