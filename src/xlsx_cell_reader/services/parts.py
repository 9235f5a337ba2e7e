"""Turn archive parts into XML event streams."""

from __future__ import annotations

from collections.abc import Iterator

from xlsx_cell_reader.services.archive import Archive
from xlsx_cell_reader.services.stream_normalizer import normalize_part
from xlsx_cell_reader.services.xml_tokenizer import XmlEvent, tokenize


def part_events(archive: Archive, name: str) -> Iterator[XmlEvent]:
    """Buffer the part ``name``, strip any BOM and tokenize it."""
    return tokenize(normalize_part(archive.read(name)), part_name=name)
