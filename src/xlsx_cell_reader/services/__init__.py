"""Services resolving the document model of a spreadsheet package."""

from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.relationships import resolve_relationships
from xlsx_cell_reader.services.shared_strings import load_shared_strings
from xlsx_cell_reader.services.workbook_directory import load_workbook_directory
from xlsx_cell_reader.services.worksheet_decoder import decode_worksheet

__all__ = [
    "Archive",
    "decode_worksheet",
    "load_shared_strings",
    "load_workbook_directory",
    "resolve_relationships",
]
