"""Streaming decoder turning worksheet XML events into typed cells.

The decoder is a small state machine. :class:`DecoderState` holds the row
and column cursor, the kind of the current cell and whether the next text is
a value; :func:`step` maps ``(state, event)`` to the next state and at most
one emitted :class:`~xlsx_cell_reader.models.Cell`.

Rules worth knowing when reading the output:

- the row number comes from the ``r`` attribute of ``<row>``;
- the column is a per-row counter of ``<c>`` elements, so rows that omit
  blank cells are numbered densely;
- a ``<c>`` without ``t="s"`` or ``t="n"`` keeps the kind of the previous
  cell;
- a ``<c>`` without ``<v>`` emits nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from xlsx_cell_reader.models import Cell, CellValue
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, XmlEventType
from xlsx_cell_reader.utils.exceptions import (
    FloatParseError,
    IntegerParseError,
    SharedStringIndexError,
)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class CellKind(str, Enum):
    """How the text of a cell's ``<v>`` is interpreted."""

    SHARED_STRING = "s"
    NUMBER = "n"


@dataclass(frozen=True)
class DecoderState:
    row: int = 0
    column: int = 0
    kind: CellKind = CellKind.SHARED_STRING
    capture_value: bool = False


def parse_unsigned(text: str, row: int | None = None, column: int | None = None) -> int:
    """Parse a non-negative decimal integer (``+`` sign allowed)."""
    if not _UNSIGNED_RE.fullmatch(text):
        raise IntegerParseError(text, row=row, column=column)
    return int(text)


def parse_number(
    text: str, row: int | None = None, column: int | None = None
) -> CellValue:
    """Decode numeric cell text, trying a 64-bit integer before a float.

    Only ASCII text is accepted; surrounding whitespace and ``_`` separators
    are rejected.
    """
    if _SIGNED_RE.fullmatch(text):
        value = int(text)
        if _INT64_MIN <= value <= _INT64_MAX:
            return CellValue.from_int(value)

    # float() also accepts underscores and non-ASCII digits.
    if text != text.strip() or "_" in text or not text.isascii():
        raise FloatParseError(text, row=row, column=column)
    try:
        return CellValue.from_float(float(text))
    except ValueError as e:
        raise FloatParseError(text, row=row, column=column) from e


def resolve_shared_string(
    text: str,
    shared_strings: Sequence[str],
    row: int | None = None,
    column: int | None = None,
) -> CellValue:
    """Look up the shared string whose index is ``text``."""
    index = parse_unsigned(text, row=row, column=column)
    if index >= len(shared_strings):
        raise SharedStringIndexError(
            index,
            len(shared_strings),
            details={"row": row, "column": column},
        )
    return CellValue.from_text(shared_strings[index])


def _start_element(state: DecoderState, event: XmlEvent) -> DecoderState:
    state = replace(state, capture_value=False)

    if event.name == "row":
        row_number = event.attribute("r")
        row = state.row
        if row_number is not None:
            row = parse_unsigned(row_number, row=state.row, column=state.column)
        return replace(state, row=row, column=0)

    if event.name == "c":
        cell_type = event.attribute("t")
        kind = state.kind
        if cell_type == CellKind.SHARED_STRING.value:
            kind = CellKind.SHARED_STRING
        elif cell_type == CellKind.NUMBER.value:
            kind = CellKind.NUMBER
        return replace(state, kind=kind, column=state.column + 1)

    if event.name == "v":
        return replace(state, capture_value=True)

    return state


def step(
    state: DecoderState, event: XmlEvent, shared_strings: Sequence[str]
) -> tuple[DecoderState, Cell | None]:
    """Advance the decoder by one event.

    Returns:
        The next state and the cell completed by ``event``, if any.

    Raises:
        IntegerParseError: If a row number or string index is not an
            unsigned integer.
        FloatParseError: If numeric cell text is not a number.
        SharedStringIndexError: If a string index is past the table end.
    """
    if event.type is XmlEventType.START_ELEMENT:
        return _start_element(state, event), None

    if event.type is XmlEventType.CHARACTERS and state.capture_value:
        if state.kind is CellKind.SHARED_STRING:
            value = resolve_shared_string(
                event.text, shared_strings, row=state.row, column=state.column
            )
        else:
            value = parse_number(event.text, row=state.row, column=state.column)
        return state, Cell(row=state.row, column=state.column, value=value)

    return state, None


def iter_cells(
    events: Iterable[XmlEvent], shared_strings: Sequence[str]
) -> Iterator[Cell]:
    """Yield cells as the worksheet events are consumed."""
    state = DecoderState()
    for event in events:
        state, cell = step(state, event, shared_strings)
        if cell is not None:
            yield cell


def decode_worksheet(
    events: Iterable[XmlEvent], shared_strings: Sequence[str]
) -> list[Cell]:
    """Decode a whole worksheet into a list of cells in document order."""
    return list(iter_cells(events, shared_strings))
