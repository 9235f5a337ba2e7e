"""Public entry points for reading a spreadsheet package.

Reading happens in two phases with distinct types:

    with open_workbook("book.xlsx") as workbook:
        loaded = workbook.load()
        for name in loaded.list_worksheet():
            sheet = loaded.load_worksheet(name)

Only :class:`LoadedWorkbook` exposes worksheet access, so a sheet cannot be
requested before the relationship, directory and shared string tables exist.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Self

from xlsx_cell_reader.config import RelationshipScope, Settings
from xlsx_cell_reader.config import settings as default_settings
from xlsx_cell_reader.models import RelationshipTable, SheetRef, WorkSheet
from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.parts import part_events
from xlsx_cell_reader.services.relationships import (
    part_name,
    resolve_relationships,
    scoped_relationships,
)
from xlsx_cell_reader.services.shared_strings import (
    load_shared_strings,
    locate_shared_strings_part,
)
from xlsx_cell_reader.services.workbook_directory import (
    load_workbook_directory,
    locate_workbook_part,
)
from xlsx_cell_reader.services.worksheet_decoder import decode_worksheet
from xlsx_cell_reader.utils.exceptions import (
    RelationshipNotFoundError,
    SheetNotFoundError,
)
from xlsx_cell_reader.utils.logging import LogContext, get_logger, timed_operation

logger = get_logger(__name__)


class _ArchiveOwner:
    """Shared close/context-manager behaviour of both workbook phases."""

    _archive: Archive

    @property
    def path(self) -> Path:
        return self._archive.path

    def close(self) -> None:
        """Close the underlying archive; both phases share it."""
        self._archive.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class Workbook(_ArchiveOwner):
    """An opened but not yet resolved spreadsheet package."""

    def __init__(self, archive: Archive, settings: Settings | None = None) -> None:
        self._archive = archive
        self._settings = settings or default_settings

    def load(self) -> LoadedWorkbook:
        """Resolve relationships, the sheet directory and shared strings.

        The three tables are built in that order and only handed out once all
        of them succeeded.

        Raises:
            XlsxReaderError: Any archive, XML or parse failure.
        """
        scope = self._settings.relationship_scope
        with LogContext(document=str(self.path)):
            with timed_operation(logger, "load") as metrics:
                relationships = resolve_relationships(self._archive)
                workbook_part = locate_workbook_part(relationships, scope)
                sheets = load_workbook_directory(self._archive, workbook_part)
                strings_part = locate_shared_strings_part(
                    relationships, workbook_part, scope
                )
                shared_strings = load_shared_strings(self._archive, strings_part)

                metrics.relationships_resolved = len(relationships)
                metrics.strings_loaded = len(shared_strings)
                metrics.custom_metrics["sheets"] = len(sheets)

        logger.info(
            "Workbook loaded",
            path=str(self.path),
            sheets=len(sheets),
            shared_strings=len(shared_strings),
        )
        return LoadedWorkbook(
            archive=self._archive,
            relationships=relationships,
            sheets=sheets,
            shared_strings=shared_strings,
            workbook_part=workbook_part,
            scope=scope,
        )


class LoadedWorkbook(_ArchiveOwner):
    """A spreadsheet package whose lookup tables are resolved.

    The tables never change after construction, so ``load_worksheet`` can be
    called any number of times for the same sheet.
    """

    def __init__(
        self,
        archive: Archive,
        relationships: RelationshipTable,
        sheets: Mapping[str, SheetRef],
        shared_strings: tuple[str, ...],
        workbook_part: str | None = None,
        scope: RelationshipScope = "global",
    ) -> None:
        self._archive = archive
        self._relationships = relationships
        self._sheets = sheets
        self._shared_strings = shared_strings
        self._workbook_part = workbook_part
        self._scope = scope

    @property
    def relationships(self) -> RelationshipTable:
        return self._relationships

    @property
    def sheet_refs(self) -> Mapping[str, SheetRef]:
        return self._sheets

    @property
    def shared_strings(self) -> tuple[str, ...]:
        return self._shared_strings

    def list_worksheet(self) -> list[str]:
        """Names of all sheets declared by the workbook part."""
        return list(self._sheets)

    def worksheet_part(self, name: str) -> str:
        """Archive entry holding the worksheet called ``name``.

        Raises:
            SheetNotFoundError: If the workbook declares no such sheet.
            RelationshipNotFoundError: If the sheet's relationship id is not
                declared.
        """
        sheet = self._sheets.get(name)
        if sheet is None:
            raise SheetNotFoundError(name, available=self.list_worksheet())

        relationships = scoped_relationships(
            self._relationships, self._workbook_part, self._scope
        )
        relationship = relationships.get(sheet.relationship_id)
        if relationship is None:
            raise RelationshipNotFoundError(
                sheet.relationship_id, details={"sheet": name}
            )
        return part_name(relationship, self._scope)

    def load_worksheet(self, name: str) -> WorkSheet:
        """Decode every cell of the worksheet called ``name``.

        Raises:
            SheetNotFoundError: If the workbook declares no such sheet.
            RelationshipNotFoundError: If the sheet's relationship is missing.
            XlsxReaderError: Any archive, XML or cell parse failure.
        """
        with LogContext(document=str(self.path), sheet=name):
            with timed_operation(logger, "load_worksheet") as metrics:
                part = self.worksheet_part(name)
                cells = decode_worksheet(
                    part_events(self._archive, part), self._shared_strings
                )
                metrics.parts_read = 1
                metrics.cells_decoded = len(cells)

        logger.debug("Worksheet decoded", sheet=name, part=part, cells=len(cells))
        return WorkSheet(name=name, cells=cells)


def open_workbook(path: str | Path, settings: Settings | None = None) -> Workbook:
    """Open the spreadsheet at ``path`` without resolving anything yet.

    Raises:
        ArchiveNotFoundError: If ``path`` does not exist.
        ArchiveFormatError: If ``path`` is not a ZIP archive.
    """
    opts = settings or default_settings
    return Workbook(Archive.open(path, opts), opts)
