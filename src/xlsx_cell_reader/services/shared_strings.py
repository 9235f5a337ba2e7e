"""Shared string table loading."""

from __future__ import annotations

from collections.abc import Iterable

from xlsx_cell_reader.config import RelationshipScope
from xlsx_cell_reader.models import RelationshipTable
from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.parts import part_events
from xlsx_cell_reader.services.relationships import (
    SHARED_STRINGS_SUFFIX,
    find_by_kind_suffix,
    part_name,
    scoped_relationships,
)
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, XmlEventType
from xlsx_cell_reader.utils.logging import get_logger

logger = get_logger(__name__)


def locate_shared_strings_part(
    relationships: RelationshipTable,
    workbook_part: str | None = None,
    scope: RelationshipScope = "global",
) -> str | None:
    """Archive entry of the shared string table, or None if undeclared."""
    candidates = scoped_relationships(relationships, workbook_part, scope)
    relationship = find_by_kind_suffix(candidates, SHARED_STRINGS_SUFFIX)
    if relationship is None:
        return None
    return part_name(relationship, scope)


def parse_shared_strings(events: Iterable[XmlEvent]) -> tuple[str, ...]:
    """Collect text found directly inside ``<t>`` elements, in document order.

    Each character event counts as one entry, so a rich-text ``<si>`` with
    several runs contributes one entry per run. Any start tag other than
    ``<t>`` stops capture until the next ``<t>``.
    """
    strings: list[str] = []
    capturing = False
    for event in events:
        if event.type is XmlEventType.START_ELEMENT:
            capturing = event.name == "t"
        elif event.type is XmlEventType.CHARACTERS and capturing:
            strings.append(event.text)
    return tuple(strings)


def load_shared_strings(archive: Archive, part: str | None) -> tuple[str, ...]:
    """Load the shared string table from ``part``; no part means no strings."""
    if part is None:
        logger.debug("No shared strings relationship; using an empty table")
        return ()

    strings = parse_shared_strings(part_events(archive, part))
    logger.debug("Loaded shared strings", part=part, count=len(strings))
    return strings
