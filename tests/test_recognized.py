import pytest
from pydantic import ValidationError

import tableedit as te


def test_region_bounds() -> None:
    region = te.NormalizedRegion(x=0, y=0, width=1, height=1)

    assert region.width == 1.0
    with pytest.raises(ValidationError):
        te.NormalizedRegion(x=-0.1, y=0, width=0.5, height=0.5)


def test_region_is_frozen() -> None:
    region = te.NormalizedRegion(x=0.1, y=0.1, width=0.1, height=0.1)

    with pytest.raises(ValidationError):
        region.x = 0.5  # type: ignore[misc]


def test_ragged_table_rejected() -> None:
    with pytest.raises(ValidationError, match="same number of cells"):
        te.RecognizedTable(rows=[[te.RecognizedCell(text="a")], []])


def test_from_table_uses_current_content() -> None:
    region = te.NormalizedRegion(x=0.5, y=0.5, width=0.25, height=0.1)
    recognized = te.RecognizedTable(
        rows=[[te.RecognizedCell(text="a", region=region), te.RecognizedCell(text="b")]],
    )
    table = te.EditableTable.from_recognized(recognized)
    table.update_cell(0, 1, "changed")
    table.move_column(0, 1)

    rebuilt = te.RecognizedTable.from_table(table)

    assert rebuilt.rows == [[te.RecognizedCell(text="changed"), te.RecognizedCell(text="a", region=region)]]
