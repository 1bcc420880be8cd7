import pytest

from report_engine.core.exceptions import ReportConfigurationError
from report_engine.reports.column_spec import ColumnSpec
from report_engine.reports.table_builder import ReportTable, TableBuilder

COLUMNS = [ColumnSpec("Name", key="name"), ColumnSpec("Score", key="score")]


def mapper(row):
    return [row["name"], row["score"]]


@pytest.fixture
def builder():
    return TableBuilder(report_name="test_report")


def test_build_from_list_and_mapping(builder):
    rows = [{"name": "Ana", "score": 80}, {"name": "Budi", "score": 0}]
    table = builder.build(rows, COLUMNS, mapper)
    assert table.headers == ["Name", "Score"]
    assert table.rows == (("Ana", 80), ("Budi", 0))
    assert not table.is_placeholder

    keyed = builder.build({1: rows[0], 2: rows[1]}, COLUMNS, mapper)
    assert keyed.rows == table.rows


def test_empty_input_gives_single_placeholder_row(builder):
    table = builder.build([], COLUMNS, mapper)
    assert table.is_placeholder
    assert table.rows == (("", ""),)

    custom = builder.build(None, COLUMNS, mapper, placeholder=["", "No data"])
    assert custom.rows == (("", "No data"),)


def test_arity_mismatch_is_fatal(builder):
    with pytest.raises(ReportConfigurationError) as exc_info:
        builder.build([{"name": "Ana", "score": 1}], COLUMNS, lambda row: [row["name"]])

    error = exc_info.value
    assert error.expected == 2
    assert error.actual == 1
    assert error.row_index == 0
    assert error.details["report"] == "test_report"


def test_placeholder_arity_is_checked(builder):
    with pytest.raises(ReportConfigurationError):
        builder.build([], COLUMNS, mapper, placeholder=["only one"])


def test_row_must_be_a_sequence(builder):
    with pytest.raises(ReportConfigurationError):
        builder.build([{"name": "Ana", "score": 1}], COLUMNS, lambda row: "ab")


@pytest.mark.parametrize(
    "columns",
    [
        [],
        [ColumnSpec("Name"), ColumnSpec("Name")],
        [ColumnSpec("Name"), ColumnSpec("  ")],
    ],
)
def test_invalid_columns(builder, columns):
    with pytest.raises(ReportConfigurationError):
        builder.build([], columns, mapper)


def test_build_is_deterministic(builder):
    rows = [{"name": "Ana", "score": 80}, {"name": "Budi", "score": 70}]
    assert builder.build(rows, COLUMNS, mapper) == builder.build(rows, COLUMNS, mapper)


def test_with_metadata_and_records(builder):
    table = builder.build([{"name": "Ana", "score": 80}], COLUMNS, mapper)
    full = table.with_metadata("Title", "Sheet", ["TITLE", "info", ""], report_type="demo")
    assert isinstance(full, ReportTable)
    assert full.metadata_rows == ("TITLE", "info", "")
    assert full.rows == table.rows
    assert table.metadata_rows == ()
    assert full.records() == [{"name": "Ana", "score": 80}]
