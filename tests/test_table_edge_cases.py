"""Invariant checks for EditableTable over every valid index combination."""

from collections import Counter
from itertools import product

import pytest

import tableedit as te


def make_grid(rows: int, columns: int) -> te.EditableTable:
    return te.EditableTable([te.Cell(content=f"r{r}c{c}") for c in range(columns)] for r in range(rows))


SHAPES = [(1, 1), (2, 3), (4, 4), (5, 2)]


@pytest.mark.parametrize(("rows", "columns"), SHAPES)
def test_remove_column_keeps_rows_rectangular(rows: int, columns: int) -> None:
    for index in range(columns):
        table = make_grid(rows, columns)

        table.remove_column(index)

        assert {len(row) for row in table.rows} == {columns - 1}
        assert table.column_count == columns - 1


@pytest.mark.parametrize(("rows", "columns"), SHAPES)
def test_move_row_is_permutation(rows: int, columns: int) -> None:
    for source, destination in product(range(rows), repeat=2):
        table = make_grid(rows, columns)
        before = Counter(tuple(row) for row in table.contents())

        table.move_row(source, destination)

        assert Counter(tuple(row) for row in table.contents()) == before
        assert table.contents()[destination] == make_grid(rows, columns).contents()[source]


@pytest.mark.parametrize(("rows", "columns"), SHAPES)
def test_move_column_is_permutation(rows: int, columns: int) -> None:
    for source, destination in product(range(columns), repeat=2):
        table = make_grid(rows, columns)
        original_columns = [list(column) for column in zip(*table.contents(), strict=True)]

        table.move_column(source, destination)

        moved_columns = [list(column) for column in zip(*table.contents(), strict=True)]
        assert Counter(map(tuple, moved_columns)) == Counter(map(tuple, original_columns))
        assert moved_columns[destination] == original_columns[source]


def test_move_column_keeps_alignment_across_rows() -> None:
    table = make_grid(3, 4)

    table.move_column(3, 1)

    for r, row in enumerate(table.contents()):
        assert row == [f"r{r}c0", f"r{r}c3", f"r{r}c1", f"r{r}c2"]


def test_move_preserves_cell_ids() -> None:
    table = make_grid(3, 3)
    ids = {cell.id for row in table for cell in row}

    table.move_row(0, 2)
    table.move_column(2, 0)

    assert {cell.id for row in table for cell in row} == ids


def test_batch_delete_regression() -> None:
    table = te.EditableTable([te.Cell(content=text)] for text in "ABCD")

    for index in sorted({0, 2}, reverse=True):
        table.remove_row(index)

    assert table.contents() == [["B"], ["D"]]


def test_repeated_deletion_of_same_index_does_not_raise() -> None:
    table = make_grid(2, 2)

    table.remove_row(1)
    table.remove_row(1)
    table.remove_column(1)
    table.remove_column(1)

    assert table.contents() == [["r0c0"]]
