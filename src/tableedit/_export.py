"""Flat-text export formats for editable tables."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from ._table import EditableTable


class ExportFormat(StrEnum):
    """Supported export formats.

    Each member carries a display label and the file suffix used when writing to disk.
    """

    label: str
    suffix: str

    def __new__(cls, value: str, label: str, suffix: str) -> Self:
        """Create a new member with its label and suffix."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        obj.suffix = suffix
        return obj

    TSV = "tsv", "TSV", ".tsv"
    CSV = "csv", "CSV", ".csv"


def export_table(table: EditableTable, export_format: ExportFormat) -> str:
    """Serialize `table` in the given format."""
    match export_format:
        case ExportFormat.TSV:
            return table.export_to_tsv()
        case ExportFormat.CSV:
            return table.export_to_csv()

    msg = f"Unknown export format: {export_format!r}"
    raise ValueError(msg)
