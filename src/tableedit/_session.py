"""Headless editing session layered on top of an `EditableTable`.

The table knows nothing about selection or focus. A screen editing a table
keeps that state itself: which rows and columns are ticked, which cell has
the text cursor, and the short-lived notice shown after an export. This module
holds that state so it can be driven and tested without a UI toolkit.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._export import ExportFormat, export_table

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from ._table import EditableTable

logger = logging.getLogger(__name__)

NOTICE_DURATION = 2.0
"""Seconds an export notice stays visible."""


@dataclass(slots=True, frozen=True)
class Notice:
    """A transient message with the clock time after which it is gone."""

    message: str
    expires_at: float

    def is_active(self, now: float) -> bool:
        """Whether the notice should still be shown at `now`."""
        return now < self.expires_at


@dataclass(slots=True)
class EditSession:
    """Selection, focus and notice state for one table editor.

    Selections are sets of current row/column indices. They are cleared by the
    batch deletions that consume them, so they never point at shifted rows.
    """

    table: EditableTable
    selected_rows: set[int] = field(default_factory=set)
    selected_columns: set[int] = field(default_factory=set)
    editing_id: UUID | None = None
    notice: Notice | None = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    # Selection

    @property
    def has_selection(self) -> bool:
        return bool(self.selected_rows or self.selected_columns)

    def toggle_row_selection(self, index: int) -> None:
        """Select the row if unselected, unselect it otherwise."""
        self.selected_rows ^= {index}

    def toggle_column_selection(self, index: int) -> None:
        """Select the column if unselected, unselect it otherwise."""
        self.selected_columns ^= {index}

    def clear_selection(self) -> None:
        self.selected_rows.clear()
        self.selected_columns.clear()

    def is_cell_highlighted(self, row: int, column: int) -> bool:
        """Whether the cell lies in a selected row or column."""
        return row in self.selected_rows or column in self.selected_columns

    def delete_selected_rows(self) -> int:
        """Remove every selected row and clear the row selection.

        Returns:
            The number of rows removed.

        """
        removed = self.table.remove_rows(self.selected_rows)
        logger.debug("Deleted %d selected row(s)", removed)
        self.selected_rows.clear()
        self._drop_stale_editing_cell()
        return removed

    def delete_selected_columns(self) -> int:
        """Remove every selected column and clear the column selection.

        Returns:
            The number of columns removed.

        """
        removed = self.table.remove_columns(self.selected_columns)
        logger.debug("Deleted %d selected column(s)", removed)
        self.selected_columns.clear()
        self._drop_stale_editing_cell()
        return removed

    # Editing

    @property
    def editing_cell(self) -> tuple[int, int] | None:
        """Current `(row, column)` of the cell being edited, or None.

        The position is looked up from the cell's identifier, so it follows the
        cell when rows or columns around it are removed or moved.
        """
        if self.editing_id is None:
            return None
        return self.table.position_of(self.editing_id)

    def begin_editing(self, row: int, column: int) -> None:
        """Put the text cursor in `(row, column)`. Ignored if there is no such cell."""
        cell = self.table.cell_at(row, column)
        if cell is None:
            return
        self.editing_id = cell.id

    def end_editing(self) -> None:
        self.editing_id = None

    def is_editing(self, row: int, column: int) -> bool:
        return self.editing_cell == (row, column)

    def commit_edit(self, content: str) -> None:
        """Write `content` into the cell being edited and leave edit mode.

        Does nothing but leave edit mode if the cell has been deleted meanwhile.
        """
        position = self.editing_cell
        if position is not None:
            row, column = position
            self.table.update_cell(row, column, content)
        self.end_editing()

    def _drop_stale_editing_cell(self) -> None:
        if self.editing_id is not None and self.editing_cell is None:
            self.editing_id = None

    # Header and export

    @property
    def dimensions_label(self) -> str:
        """Row and column counts as shown in the editor toolbar, e.g. ``3 × 4``."""
        return f"{self.table.row_count} × {self.table.column_count}"

    def export(self, export_format: ExportFormat, deliver: Callable[[str], object]) -> str:
        """Serialize the table, hand the text to `deliver`, and post a notice.

        `deliver` is whatever puts the text where the user wants it, typically a
        clipboard writer supplied by the UI.
        """
        content = export_table(self.table, export_format)
        deliver(content)
        self._post_notice(f"{export_format.label} copied to clipboard!")
        return content

    def copy_table(self, deliver: Callable[[str], object]) -> str:
        """Deliver the table as TSV, the format spreadsheets accept on paste."""
        content = self.table.export_to_tsv()
        deliver(content)
        self._post_notice("Table copied to clipboard!")
        return content

    def active_notice(self) -> Notice | None:
        """The current notice, or None once it has expired."""
        if self.notice is not None and not self.notice.is_active(self.clock()):
            self.notice = None
        return self.notice

    def _post_notice(self, message: str) -> None:
        self.notice = Notice(message=message, expires_at=self.clock() + NOTICE_DURATION)
