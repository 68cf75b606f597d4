"""Editable tables for the output of a table recognizer."""

__all__ = [
    "NOTICE_DURATION",
    "Cell",
    "ChangeKind",
    "EditSession",
    "EditableTable",
    "ExportFormat",
    "NormalizedRegion",
    "Notice",
    "RecognizedCell",
    "RecognizedTable",
    "TableChange",
    "TableListener",
    "export_table",
    "load_recognized_table",
    "load_table",
    "recognized_table_from_dict",
    "save_recognized_table",
    "write_export",
]

from ._cell import Cell
from ._export import ExportFormat, export_table
from ._io import load_recognized_table, load_table, recognized_table_from_dict, save_recognized_table, write_export
from ._recognized import NormalizedRegion, RecognizedCell, RecognizedTable
from ._session import NOTICE_DURATION, EditSession, Notice
from ._table import ChangeKind, EditableTable, TableChange, TableListener
