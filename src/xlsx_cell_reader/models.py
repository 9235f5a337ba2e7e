"""Dataclasses representing a resolved spreadsheet document model."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import pandas as pd


class ValueType(str, Enum):
    """Type tag of a decoded cell value."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    EMPTY = "empty"


@dataclass(frozen=True)
class CellValue:
    """Tagged cell value.

    ``EMPTY`` is part of the union but the worksheet decoder never produces
    it: cells without a ``<v>`` element are left out of the result instead.
    """

    kind: ValueType
    data: str | int | float | None = None

    @classmethod
    def from_text(cls, value: str) -> CellValue:
        return cls(ValueType.TEXT, value)

    @classmethod
    def from_int(cls, value: int) -> CellValue:
        return cls(ValueType.INTEGER, value)

    @classmethod
    def from_float(cls, value: float) -> CellValue:
        return cls(ValueType.FLOAT, value)

    @classmethod
    def empty(cls) -> CellValue:
        return cls(ValueType.EMPTY, None)

    @property
    def is_empty(self) -> bool:
        return self.kind is ValueType.EMPTY


@dataclass(frozen=True)
class Relationship:
    """Target and kind of one ``<Relationship>`` entry.

    ``target`` has its leading ``/`` removed; ``is_absolute`` records whether
    there was one. ``source`` names the ``.rels`` part the entry was declared
    in.
    """

    target: str
    kind: str
    source: str = ""
    is_absolute: bool = False


@dataclass(frozen=True)
class SheetRef:
    """Workbook declaration of a sheet: its numeric id and relationship id."""

    numeric_id: str
    relationship_id: str


@dataclass(frozen=True)
class RelationshipTable:
    """Relationships resolved from every ``.rels`` part of an archive.

    ``by_id`` is one flat namespace where a later declaration of an id
    replaces an earlier one. ``by_part`` keeps each ``.rels`` part's own
    entries so lookups can be scoped to a single source part.
    """

    by_id: Mapping[str, Relationship] = field(
        default_factory=lambda: MappingProxyType({})
    )
    by_part: Mapping[str, Mapping[str, Relationship]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, relationship_id: object) -> bool:
        return relationship_id in self.by_id

    def get(self, relationship_id: str) -> Relationship | None:
        return self.by_id.get(relationship_id)

    def in_part(self, rels_part: str) -> Mapping[str, Relationship]:
        """Relationships declared by one ``.rels`` part (empty if unknown)."""
        return self.by_part.get(rels_part, MappingProxyType({}))


@dataclass(frozen=True)
class Cell:
    """One decoded cell.

    ``column`` counts ``<c>`` elements within the current row starting at 1;
    it is not decoded from the cell's address.
    """

    row: int
    column: int
    value: CellValue


@dataclass
class WorkSheet:
    """Cells decoded from a single worksheet part, in document order."""

    name: str
    cells: list[Cell] = field(default_factory=list)

    def rows(self) -> Iterator[tuple[int, list[Cell]]]:
        """Yield ``(row_number, cells)`` once per row, in ascending row order.

        Cells of a row keep their document order even when the row number
        appears more than once in the sheet.
        """
        grouped: dict[int, list[Cell]] = {}
        for cell in self.cells:
            grouped.setdefault(cell.row, []).append(cell)
        for row in sorted(grouped):
            yield row, grouped[row]

    def to_dataframe(self) -> pd.DataFrame:
        """Lay the cells out as a DataFrame indexed by row number.

        Columns are the per-row column counters ``1..max``; positions with
        no cell hold ``None``.
        """
        if not self.cells:
            return pd.DataFrame()

        grid: dict[int, dict[int, str | int | float | None]] = {}
        for cell in self.cells:
            grid.setdefault(cell.row, {})[cell.column] = cell.value.data

        # A <v> seen before any <c> in its row lands in column 0.
        first_column = min(1, min(cell.column for cell in self.cells))
        max_column = max(cell.column for cell in self.cells)
        columns = list(range(first_column, max_column + 1))
        index = sorted(grid)
        data = [[grid[row].get(column) for column in columns] for row in index]
        return pd.DataFrame(data, index=index, columns=columns, dtype=object)
