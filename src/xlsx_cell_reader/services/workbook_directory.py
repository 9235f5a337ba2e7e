"""Sheet directory of the workbook part."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from xlsx_cell_reader.config import RelationshipScope
from xlsx_cell_reader.models import RelationshipTable, SheetRef
from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.parts import part_events
from xlsx_cell_reader.services.relationships import (
    OFFICE_DOCUMENT_SUFFIX,
    PACKAGE_RELS_PART,
    find_by_kind_suffix,
    part_name,
)
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, XmlEventType
from xlsx_cell_reader.utils.logging import get_logger

logger = get_logger(__name__)


def locate_workbook_part(
    relationships: RelationshipTable, scope: RelationshipScope = "global"
) -> str | None:
    """Archive entry of the main document part, or None if undeclared."""
    if scope == "part":
        candidates = relationships.in_part(PACKAGE_RELS_PART)
    else:
        candidates = relationships.by_id
    relationship = find_by_kind_suffix(candidates, OFFICE_DOCUMENT_SUFFIX)
    if relationship is None:
        return None
    return part_name(relationship, scope)


def parse_workbook_directory(events: Iterable[XmlEvent]) -> dict[str, SheetRef]:
    """Map each ``<sheet>`` name to its sheet id and relationship id."""
    sheets: dict[str, SheetRef] = {}
    for event in events:
        if event.type is XmlEventType.START_ELEMENT and event.name == "sheet":
            sheets[event.attribute("name") or ""] = SheetRef(
                numeric_id=event.attribute("sheetId") or "",
                relationship_id=event.attribute("id") or "",
            )
    return sheets


def load_workbook_directory(
    archive: Archive, workbook_part: str | None
) -> Mapping[str, SheetRef]:
    """Read the sheet directory from ``workbook_part``.

    A package without a main document part has no sheets.
    """
    if workbook_part is None:
        logger.warning("No office document relationship; workbook has no sheets")
        return MappingProxyType({})

    sheets = parse_workbook_directory(part_events(archive, workbook_part))
    logger.debug("Loaded workbook directory", part=workbook_part, sheets=len(sheets))
    return MappingProxyType(sheets)
