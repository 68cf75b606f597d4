from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w

from ._export import ExportFormat, export_table
from ._recognized import RecognizedTable
from ._table import EditableTable

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".toml")


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported file type '{path.suffix}' for {path}. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        raise ValueError(msg)
    return suffix


def _strip_none(value: Any) -> Any:
    """Recursively drop None values, which TOML cannot represent."""
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_strip_none(item) for item in value]
    return value


def recognized_table_from_dict(contents: Mapping[str, Any]) -> RecognizedTable:
    """Validate parsed file contents into a `RecognizedTable`.

    This is a pure function so it can be used with data that did not come from a file.
    """
    return RecognizedTable.model_validate(contents)


def load_recognized_table(input_path: Path | str) -> RecognizedTable:
    """Load recognizer output from a JSON or TOML file.

    Both formats hold a top-level ``rows`` array of arrays of cells, each cell
    a table with ``text`` and an optional ``region`` (``x``, ``y``, ``width``,
    ``height``).

    Args:
        input_path: Path to a ``.json`` or ``.toml`` file

    Returns:
        The validated recognizer output

    Raises:
        ValueError: If the file type is not supported
        pydantic.ValidationError: If the contents do not describe a rectangular table

    """
    input_path = Path(input_path)
    suffix = _check_suffix(input_path)

    if suffix == ".json":
        recognized = RecognizedTable.model_validate_json(input_path.read_bytes())
    else:
        with input_path.open("rb") as f:
            recognized = recognized_table_from_dict(tomllib.load(f))

    logger.debug(f"Loaded recognized table from {input_path}")
    return recognized


def load_table(input_path: Path | str) -> EditableTable:
    """Load recognizer output from a file straight into an `EditableTable`."""
    return EditableTable.from_recognized(load_recognized_table(input_path))


def save_recognized_table(table: EditableTable, output_path: Path | str) -> None:
    """Write an edited table back in the recognizer's shape.

    The file type is chosen from the suffix of `output_path`, as in `load_recognized_table`.
    """
    output_path = Path(output_path)
    suffix = _check_suffix(output_path)
    recognized = RecognizedTable.from_table(table)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".json":
        output_path.write_text(recognized.model_dump_json(indent=2, exclude_none=True))
    else:
        with output_path.open("wb") as f:
            tomli_w.dump(_strip_none(recognized.model_dump(mode="python")), f)

    logger.debug(f"Saved {table.row_count} x {table.column_count} table to {output_path}")


def write_export(table: EditableTable, export_format: ExportFormat, output_path: Path | str) -> None:
    """Write the table's TSV or CSV serialization to a file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(export_table(table, export_format))
    logger.debug(f"Exported {export_format.label} to {output_path}")
