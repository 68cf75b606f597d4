"""Editable table model: a rectangular grid of cells with row/column edits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Self

from ._cell import Cell

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from uuid import UUID

    from ._recognized import RecognizedTable

logger = logging.getLogger(__name__)


class ChangeKind(StrEnum):
    """Kinds of mutation reported to table listeners."""

    CELL_UPDATED = "cell_updated"
    ROW_REMOVED = "row_removed"
    COLUMN_REMOVED = "column_removed"
    ROW_MOVED = "row_moved"
    COLUMN_MOVED = "column_moved"


@dataclass(slots=True, frozen=True)
class TableChange:
    """A single effective mutation of an `EditableTable`.

    Only the fields relevant to `kind` are set:
    - CELL_UPDATED: `row`, `column`
    - ROW_REMOVED: `row`
    - COLUMN_REMOVED: `column`
    - ROW_MOVED / COLUMN_MOVED: `source`, `destination`
    """

    kind: ChangeKind
    row: int | None = None
    column: int | None = None
    source: int | None = None
    destination: int | None = None


type TableListener = Callable[[TableChange], None]


class EditableTable:
    """Row-major grid of cells whose rows all have the same length.

    Every index argument is zero-based. Indices outside the current bounds,
    negative ones included, are ignored: reads return None and mutations
    leave the table as it was. Column operations always touch every row, so
    the grid stays rectangular for its whole lifetime.
    """

    __slots__ = ("_cells", "_listeners", "_revision")

    def __init__(self, cells: Iterable[Iterable[Cell]] = ()) -> None:
        grid = [list(row) for row in cells]

        widths = {len(row) for row in grid}
        if len(widths) > 1:
            msg = f"All rows must have the same number of cells, got widths {sorted(widths)}"
            raise ValueError(msg)

        self._cells: list[list[Cell]] = grid
        self._listeners: list[TableListener] = []
        self._revision = 0

    @classmethod
    def from_recognized(cls, recognized: RecognizedTable) -> Self:
        """Create a table from recognizer output, one cell per recognized cell."""
        table = cls(
            [Cell(content=cell.text, original_region=cell.region) for cell in row]
            for row in recognized.rows
        )
        logger.debug("Created %d x %d table from recognizer output", table.row_count, table.column_count)
        return table

    @classmethod
    def empty(cls, rows: int, columns: int) -> Self:
        """Create a grid of the given size filled with blank cells."""
        if rows < 0 or columns < 0:
            msg = f"Table dimensions must be non-negative, got {rows} x {columns}"
            raise ValueError(msg)
        return cls([Cell() for _ in range(columns)] for _ in range(rows))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        """The number of rows."""
        return len(self._cells)

    @property
    def column_count(self) -> int:
        """The number of columns (0 for a table without rows)."""
        return len(self._cells[0]) if self._cells else 0

    @property
    def is_empty(self) -> bool:
        """Whether the table has no rows."""
        return not self._cells

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        """Snapshot of the grid. Cells are shared, the containers are not."""
        return tuple(tuple(row) for row in self._cells)

    @property
    def revision(self) -> int:
        """Counter incremented on every effective mutation."""
        return self._revision

    def contents(self) -> list[list[str]]:
        """The text of every cell, row by row."""
        return [[cell.content for cell in row] for row in self._cells]

    def __len__(self) -> int:
        return self.row_count

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return (tuple(row) for row in self._cells)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={self.row_count}, columns={self.column_count})"

    def _is_row(self, index: int) -> bool:
        return 0 <= index < self.row_count

    def _is_column(self, index: int) -> bool:
        return 0 <= index < self.column_count

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def cell_at(self, row: int, column: int) -> Cell | None:
        """Return the cell at `(row, column)`, or None if either index is out of bounds."""
        if not (self._is_row(row) and self._is_column(column)):
            return None
        return self._cells[row][column]

    def position_of(self, cell_id: UUID) -> tuple[int, int] | None:
        """Return the current `(row, column)` of the cell with `cell_id`, or None if it is gone."""
        for row_index, row in enumerate(self._cells):
            for column_index, cell in enumerate(row):
                if cell.id == cell_id:
                    return row_index, column_index
        return None

    def update_cell(self, row: int, column: int, content: str) -> None:
        """Replace the text of the cell at `(row, column)`.

        The cell keeps its identifier and region. Out-of-bounds coordinates are ignored.
        """
        cell = self.cell_at(row, column)
        if cell is None:
            return
        cell.content = content
        logger.debug("Updated cell (%d, %d)", row, column)
        self._notify(TableChange(ChangeKind.CELL_UPDATED, row=row, column=column))

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def remove_row(self, index: int) -> None:
        """Delete the row at `index`; later rows shift up by one."""
        if not self._is_row(index):
            return
        del self._cells[index]
        logger.debug("Removed row %d", index)
        self._notify(TableChange(ChangeKind.ROW_REMOVED, row=index))

    def remove_rows(self, indices: Iterable[int]) -> int:
        """Delete several rows given by their current indices.

        Indices are applied from the highest down, so each deletion leaves the
        remaining ones pointing at the rows the caller meant. Duplicates and
        out-of-bounds indices are skipped.

        Returns:
            The number of rows actually removed.

        """
        before = self.row_count
        for index in sorted(set(indices), reverse=True):
            self.remove_row(index)
        return before - self.row_count

    def move_row(self, source: int, destination: int) -> None:
        """Move a row by removing it at `source` and reinserting it at `destination`.

        `destination` is an index into the table as it looks after the removal,
        so moving row 0 to 2 in a four-row table makes it the third row.
        """
        if not (self._is_row(source) and self._is_row(destination)):
            return
        if source == destination:
            return
        row = self._cells.pop(source)
        self._cells.insert(destination, row)
        logger.debug("Moved row %d to %d", source, destination)
        self._notify(TableChange(ChangeKind.ROW_MOVED, source=source, destination=destination))

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def remove_column(self, index: int) -> None:
        """Delete the column at `index` from every row."""
        # Bounds are checked once up front; every row has the same width.
        if not self._is_column(index):
            return
        for row in self._cells:
            del row[index]
        logger.debug("Removed column %d", index)
        self._notify(TableChange(ChangeKind.COLUMN_REMOVED, column=index))

    def remove_columns(self, indices: Iterable[int]) -> int:
        """Delete several columns, highest index first. Returns the number removed."""
        before = self.column_count
        for index in sorted(set(indices), reverse=True):
            self.remove_column(index)
        return before - self.column_count

    def move_column(self, source: int, destination: int) -> None:
        """Move a column in every row, with the same semantics as `move_row`."""
        if not (self._is_column(source) and self._is_column(destination)):
            return
        if source == destination:
            return
        for row in self._cells:
            row.insert(destination, row.pop(source))
        logger.debug("Moved column %d to %d", source, destination)
        self._notify(TableChange(ChangeKind.COLUMN_MOVED, source=source, destination=destination))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_to_tsv(self) -> str:
        """Serialize as tab-separated values.

        Content is written verbatim; embedded tabs or newlines are not escaped.
        """
        return "\n".join("\t".join(cell.content for cell in row) for row in self._cells)

    def export_to_csv(self) -> str:
        """Serialize as comma-separated values with every field double-quoted.

        Content is written verbatim; embedded quotes or commas are not escaped.
        """
        return "\n".join(",".join(f'"{cell.content}"' for cell in row) for row in self._cells)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: TableListener) -> Callable[[], None]:
        """Register `listener` to be called after every effective mutation.

        Returns:
            A callable that unregisters the listener. Calling it twice is harmless.

        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: TableChange) -> None:
        self._revision += 1
        for listener in list(self._listeners):
            listener(change)
