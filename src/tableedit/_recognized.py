"""Models for the output of an upstream table recognizer.

A recognizer hands over a table as rows of cells, each with the transcribed
text and the normalized bounding region it was read from. These models are
the validated input boundary of the package; `EditableTable.from_recognized`
consumes them once and never calls back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from ._table import EditableTable


class NormalizedRegion(BaseModel):
    """Bounding box in image coordinates normalized to the unit square."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    width: float = Field(ge=0.0, le=1.0)
    height: float = Field(ge=0.0, le=1.0)


class RecognizedCell(BaseModel):
    """A recognized cell: transcript plus where it was found."""

    text: str = ""
    region: NormalizedRegion | None = None


class RecognizedTable(BaseModel):
    """A recognized table in row-major order."""

    rows: list[list[RecognizedCell]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_rectangular(self) -> Self:
        widths = {len(row) for row in self.rows}
        if len(widths) > 1:
            msg = f"All rows must have the same number of cells, got widths {sorted(widths)}"
            raise ValueError(msg)
        return self

    @classmethod
    def from_table(cls, table: EditableTable) -> Self:
        """Rebuild the recognizer shape from an edited table.

        Cell text is taken from the current content; regions are passed back unchanged.
        """
        return cls(
            rows=[
                [RecognizedCell(text=cell.content, region=cell.original_region) for cell in row]
                for row in table.rows
            ],
        )
