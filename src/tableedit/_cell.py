"""A single entry of an editable table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from ._recognized import NormalizedRegion


@dataclass(slots=True)
class Cell:
    """One grid entry holding editable text and optional source geometry.

    The identifier is assigned once at creation and survives row and column
    moves, so a presentation layer can follow a cell across reordering.
    `original_region` is the bounding region the recognizer attached to the
    cell; it is carried along untouched and written back on save.
    """

    content: str = ""
    original_region: NormalizedRegion | None = None
    id: UUID = field(default_factory=uuid4)
    # Presentation-only flag, never read by the table itself.
    selected: bool = field(default=False, compare=False)
