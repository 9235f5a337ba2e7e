"""xlsx-cell-reader - typed cell extraction from OOXML spreadsheet packages."""

from xlsx_cell_reader.models import Cell, CellValue, ValueType, WorkSheet
from xlsx_cell_reader.workbook import LoadedWorkbook, Workbook, open_workbook

__all__ = [
    "Cell",
    "CellValue",
    "LoadedWorkbook",
    "ValueType",
    "WorkSheet",
    "Workbook",
    "open_workbook",
]
__version__ = "0.1.0"
