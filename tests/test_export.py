import pytest

import tableedit as te


def test_export_format_values() -> None:
    assert te.ExportFormat("tsv") is te.ExportFormat.TSV
    assert te.ExportFormat.CSV == "csv"
    assert f"{te.ExportFormat.CSV}" == "csv"


def test_export_format_metadata() -> None:
    assert te.ExportFormat.TSV.label == "TSV"
    assert te.ExportFormat.TSV.suffix == ".tsv"
    assert te.ExportFormat.CSV.label == "CSV"
    assert te.ExportFormat.CSV.suffix == ".csv"


@pytest.mark.parametrize(
    ("export_format", "expected"),
    [(te.ExportFormat.TSV, "a\tb\nc\td"), (te.ExportFormat.CSV, '"a","b"\n"c","d"')],
)
def test_export_table(export_format: te.ExportFormat, expected: str) -> None:
    table = te.EditableTable([te.Cell(content=text) for text in row] for row in (("a", "b"), ("c", "d")))

    assert te.export_table(table, export_format) == expected


def test_export_table_empty() -> None:
    table = te.EditableTable.empty(0, 0)

    for export_format in te.ExportFormat:
        assert te.export_table(table, export_format) == ""
