"""Relationship resolution for spreadsheet packages.

Every ``.rels`` part in the archive is parsed into one
:class:`~xlsx_cell_reader.models.RelationshipTable`. Ids are only unique
within their own ``.rels`` part, but the flat ``by_id`` view merges them all
and the last declaration of an id wins. The ``part`` relationship scope uses
the per-part view instead.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from xlsx_cell_reader.config import RelationshipScope
from xlsx_cell_reader.models import Relationship, RelationshipTable
from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.parts import part_events
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, XmlEventType
from xlsx_cell_reader.utils.logging import get_logger

logger = get_logger(__name__)

RELS_SUFFIX = ".rels"
PACKAGE_RELS_PART = "_rels/.rels"
OFFICE_DOCUMENT_SUFFIX = "/officeDocument"
SHARED_STRINGS_SUFFIX = "/sharedStrings"


def normalize_target(target: str) -> str:
    """Drop one leading ``/`` so the target names an archive entry."""
    return target[1:] if target.startswith("/") else target


def parse_relationships(
    events: Iterable[XmlEvent], source: str = ""
) -> dict[str, Relationship]:
    """Collect the ``<Relationship>`` entries of one ``.rels`` part.

    Missing ``Id``, ``Target`` or ``Type`` attributes read as empty strings.
    """
    relationships: dict[str, Relationship] = {}
    for event in events:
        if event.type is not XmlEventType.START_ELEMENT:
            continue
        if event.name != "Relationship":
            continue
        raw_target = event.attribute("Target") or ""
        relationships[event.attribute("Id") or ""] = Relationship(
            target=normalize_target(raw_target),
            kind=event.attribute("Type") or "",
            source=source,
            is_absolute=raw_target.startswith("/"),
        )
    return relationships


def resolve_relationships(archive: Archive) -> RelationshipTable:
    """Parse every ``.rels`` part of ``archive``, in archive order."""
    by_id: dict[str, Relationship] = {}
    by_part: dict[str, Mapping[str, Relationship]] = {}
    for name in archive.names():
        if not name.endswith(RELS_SUFFIX):
            continue
        relationships = parse_relationships(part_events(archive, name), source=name)
        logger.debug("Parsed relationship part", part=name, count=len(relationships))
        by_part[name] = MappingProxyType(relationships)
        by_id.update(relationships)

    return RelationshipTable(
        by_id=MappingProxyType(by_id),
        by_part=MappingProxyType(by_part),
    )


def find_by_kind_suffix(
    relationships: Mapping[str, Relationship], suffix: str
) -> Relationship | None:
    """First relationship in ``relationships`` whose kind ends with ``suffix``."""
    for relationship in relationships.values():
        if relationship.kind.endswith(suffix):
            return relationship
    return None


def rels_part_for(part_name: str) -> str:
    """Name of the ``.rels`` part holding ``part_name``'s relationships.

    ``xl/workbook.xml`` -> ``xl/_rels/workbook.xml.rels``
    """
    directory, filename = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", filename + RELS_SUFFIX)


def resolve_target(relationship: Relationship) -> str:
    """Archive entry a relationship points at, relative to its source part.

    Relative targets are joined to the directory of the part that owns the
    ``.rels`` file; absolute targets name the archive root.
    """
    if relationship.is_absolute or not relationship.source:
        return relationship.target
    owner_dir = posixpath.dirname(posixpath.dirname(relationship.source))
    return posixpath.normpath(posixpath.join(owner_dir, relationship.target))


def part_name(relationship: Relationship, scope: RelationshipScope) -> str:
    """Archive entry for ``relationship`` under the given scope."""
    if scope == "part":
        return resolve_target(relationship)
    return relationship.target


def scoped_relationships(
    table: RelationshipTable,
    owner_part: str | None,
    scope: RelationshipScope,
) -> Mapping[str, Relationship]:
    """Relationships visible from ``owner_part``.

    The global scope sees the flat table; the part scope sees only what the
    owner's own ``.rels`` part declares.
    """
    if scope == "part" and owner_part is not None:
        return table.in_part(rels_part_for(owner_part))
    return table.by_id
