"""Tests for the worksheet cell decoder."""

import io

import pytest

from tests.fixtures import SHEET1_XML, worksheet_xml
from xlsx_cell_reader.models import Cell, CellValue, ValueType
from xlsx_cell_reader.services.worksheet_decoder import (
    CellKind,
    DecoderState,
    decode_worksheet,
    iter_cells,
    parse_number,
    parse_unsigned,
    step,
)
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, XmlEventType, tokenize
from xlsx_cell_reader.utils.exceptions import (
    FloatParseError,
    IntegerParseError,
    SharedStringIndexError,
)

STRINGS = ("Name", "Amount", "Alice", "Bo", "b")


def _decode(xml: str, strings: tuple[str, ...] = STRINGS) -> list[Cell]:
    return decode_worksheet(tokenize(io.BytesIO(xml.encode())), strings)


def _start(name: str, **attributes: str) -> XmlEvent:
    return XmlEvent(
        XmlEventType.START_ELEMENT, name=name, attributes=tuple(attributes.items())
    )


def _text(text: str) -> XmlEvent:
    return XmlEvent(XmlEventType.CHARACTERS, text=text)


class TestStep:
    """Tests for the single-event transition."""

    def test_row_sets_row_and_resets_column(self) -> None:
        """A row element should set the row and reset the column."""
        state = DecoderState(row=1, column=4)

        state, cell = step(state, _start("row", r="7"), STRINGS)

        assert state.row == 7
        assert state.column == 0
        assert cell is None

    def test_cell_advances_column_and_sets_kind(self) -> None:
        """Each cell should advance the column and record its type."""
        state, _ = step(DecoderState(), _start("c", t="n"), STRINGS)
        assert state == DecoderState(column=1, kind=CellKind.NUMBER)

        state, _ = step(state, _start("c", t="s"), STRINGS)
        assert state == DecoderState(column=2, kind=CellKind.SHARED_STRING)

    def test_other_type_keeps_previous_kind(self) -> None:
        """Unrecognised cell types should keep the previous kind."""
        state = DecoderState(kind=CellKind.NUMBER)

        state, _ = step(state, _start("c", t="str"), STRINGS)

        assert state.kind is CellKind.NUMBER

    def test_value_text_emits_one_cell(self) -> None:
        """Text inside a value element should emit one cell."""
        state = DecoderState(row=2, column=1, kind=CellKind.SHARED_STRING)
        state, _ = step(state, _start("v"), STRINGS)
        assert state.capture_value is True

        state, cell = step(state, _text("2"), STRINGS)

        assert cell == Cell(row=2, column=1, value=CellValue.from_text("Alice"))

    def test_any_start_element_clears_capture(self) -> None:
        """Any start element should stop value capture."""
        state = DecoderState(capture_value=True)

        state, _ = step(state, _start("f"), STRINGS)
        state, cell = step(state, _text("1"), STRINGS)

        assert state.capture_value is False
        assert cell is None

    def test_text_outside_value_is_ignored(self) -> None:
        """Text outside a value element should not emit a cell."""
        state, cell = step(DecoderState(row=1, column=1), _text("0"), STRINGS)

        assert cell is None
        assert state == DecoderState(row=1, column=1)

    def test_end_events_leave_state_unchanged(self) -> None:
        """End and whitespace events should not change the state."""
        state = DecoderState(row=3, column=2, capture_value=True)

        for event in (
            XmlEvent(XmlEventType.END_ELEMENT, name="v"),
            XmlEvent(XmlEventType.WHITESPACE, text="\n"),
            XmlEvent(XmlEventType.END_DOCUMENT),
        ):
            next_state, cell = step(state, event, STRINGS)
            assert next_state == state
            assert cell is None

    def test_state_is_immutable(self) -> None:
        """step should return a new state instead of mutating."""
        state = DecoderState()

        step(state, _start("row", r="4"), STRINGS)

        assert state == DecoderState()


class TestDecodeWorksheet:
    """Tests for decoding whole worksheets."""

    def test_sample_sheet(self) -> None:
        """The sample sheet should decode to its six cells."""
        assert _decode(SHEET1_XML) == [
            Cell(1, 1, CellValue.from_text("Name")),
            Cell(1, 2, CellValue.from_text("Amount")),
            Cell(2, 1, CellValue.from_text("Alice")),
            Cell(2, 2, CellValue.from_int(42)),
            Cell(5, 1, CellValue.from_float(3.14)),
            Cell(5, 3, CellValue.from_int(7)),
        ]

    def test_cell_without_value_emits_nothing(self) -> None:
        """A cell with no value element should be skipped."""
        xml = worksheet_xml('<row r="1"><c t="s"/><c t="n"><v>1</v></c></row>')

        assert _decode(xml) == [Cell(1, 2, CellValue.from_int(1))]

    def test_kind_carries_over_between_rows(self) -> None:
        """An untyped cell should inherit the kind across rows."""
        xml = worksheet_xml(
            '<row r="1"><c t="n"><v>5</v></c></row>'
            '<row r="2"><c><v>1</v></c></row>'
        )

        assert _decode(xml)[1] == Cell(2, 1, CellValue.from_int(1))

    def test_first_cell_defaults_to_shared_string(self) -> None:
        """An untyped first cell should be read as a string index."""
        xml = worksheet_xml('<row r="1"><c><v>3</v></c></row>')

        assert _decode(xml) == [Cell(1, 1, CellValue.from_text("Bo"))]

    def test_row_without_number_keeps_previous_row(self) -> None:
        """A row with no number should reuse the previous row."""
        xml = worksheet_xml(
            '<row r="4"><c t="n"><v>1</v></c></row>'
            '<row><c t="n"><v>2</v></c><c t="n"><v>3</v></c></row>'
        )

        assert [(c.row, c.column) for c in _decode(xml)] == [(4, 1), (4, 1), (4, 2)]

    def test_columns_ignore_cell_references(self) -> None:
        """Columns should count cells, not read their references."""
        xml = worksheet_xml('<row r="9"><c r="Z9" t="n"><v>1</v></c></row>')

        assert _decode(xml) == [Cell(9, 1, CellValue.from_int(1))]

    def test_formula_cells_decode_their_cached_value(self) -> None:
        """Formula cells should yield their cached value."""
        xml = worksheet_xml('<row r="1"><c t="n"><f>SUM(A2:A3)</f><v>10</v></c></row>')

        assert _decode(xml) == [Cell(1, 1, CellValue.from_int(10))]

    def test_empty_sheet(self) -> None:
        """A sheet with no rows should yield no cells."""
        assert _decode(worksheet_xml("")) == []

    def test_iter_cells_is_lazy(self) -> None:
        """iter_cells should yield before the events are exhausted."""
        events = iter(
            [_start("row", r="1"), _start("c", t="n"), _start("v"), _text("1")]
        )

        cells = iter_cells(events, STRINGS)

        assert next(cells) == Cell(1, 1, CellValue.from_int(1))

    def test_decoding_is_repeatable(self) -> None:
        """Decoding twice should give equal results."""
        assert _decode(SHEET1_XML) == _decode(SHEET1_XML)


class TestErrors:
    """Tests for decode failures."""

    def test_index_past_table_end(self) -> None:
        """An index past the table should raise SharedStringIndexError."""
        xml = worksheet_xml('<row r="1"><c t="s"><v>5</v></c></row>')

        with pytest.raises(SharedStringIndexError) as exc_info:
            _decode(xml)

        assert exc_info.value.index == 5
        assert exc_info.value.table_size == 5
        assert exc_info.value.details["row"] == 1

    def test_non_numeric_string_index(self) -> None:
        """A non-numeric index should raise IntegerParseError."""
        xml = worksheet_xml('<row r="1"><c t="s"><v>abc</v></c></row>')

        with pytest.raises(IntegerParseError) as exc_info:
            _decode(xml)

        assert exc_info.value.text == "abc"
        assert exc_info.value.error_code.value == "E4001"

    def test_bad_row_number(self) -> None:
        """A non-numeric row number should raise IntegerParseError."""
        with pytest.raises(IntegerParseError):
            _decode(worksheet_xml('<row r="x1"/>'))

    def test_bad_number(self) -> None:
        """Bad numeric text should raise FloatParseError with its position."""
        xml = worksheet_xml('<row r="1"><c t="n"><v>12abc</v></c></row>')

        with pytest.raises(FloatParseError) as exc_info:
            _decode(xml)

        assert exc_info.value.details == {"text": "12abc", "row": 1, "column": 1}

    def test_string_index_against_empty_table(self) -> None:
        """Any index should fail against an empty table."""
        xml = worksheet_xml('<row r="1"><c t="s"><v>0</v></c></row>')

        with pytest.raises(SharedStringIndexError):
            _decode(xml, strings=())

    def test_non_ascii_digits_in_number_cell(self) -> None:
        """Digits outside ASCII should not decode as a number."""
        xml = worksheet_xml('<row r="1"><c t="n"><v>\u0661\u0662</v></c></row>')

        with pytest.raises(FloatParseError) as exc_info:
            _decode(xml)

        assert exc_info.value.details["text"] == "\u0661\u0662"


class TestNumberParsing:
    """Tests for numeric and index text parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", CellValue(ValueType.INTEGER, 42)),
            ("-7", CellValue(ValueType.INTEGER, -7)),
            ("+3", CellValue(ValueType.INTEGER, 3)),
            ("3.14", CellValue(ValueType.FLOAT, 3.14)),
            ("1e3", CellValue(ValueType.FLOAT, 1000.0)),
            ("-0.5", CellValue(ValueType.FLOAT, -0.5)),
        ],
    )
    def test_integer_before_float(self, text: str, expected: CellValue) -> None:
        """Integer text should decode as an integer, otherwise a float."""
        assert parse_number(text) == expected

    def test_int64_overflow_becomes_float(self) -> None:
        """Integers beyond 64 bits should fall back to a float."""
        assert parse_number(str(2**63 - 1)).kind is ValueType.INTEGER

        value = parse_number(str(2**63))

        assert value.kind is ValueType.FLOAT
        assert value.data == float(2**63)

    @pytest.mark.parametrize(
        "text", ["", " 1.5", "1_000", "one", "1.2.3", "\u0661\u0662", "\uff11"]
    )
    def test_rejected(self, text: str) -> None:
        """Text that is not an ASCII number should be rejected."""
        with pytest.raises(FloatParseError):
            parse_number(text)

    def test_unsigned(self) -> None:
        """parse_unsigned should accept only non-negative integers."""
        assert parse_unsigned("12") == 12
        assert parse_unsigned("+12") == 12
        with pytest.raises(IntegerParseError):
            parse_unsigned("-1")
        with pytest.raises(IntegerParseError):
            parse_unsigned("")
