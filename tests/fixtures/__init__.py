"""Test fixtures and helpers for building sample spreadsheet packages.

This module provides the raw XML parts of a small two-sheet workbook and
helpers to assemble packages from them.

Example usage:
    from tests.fixtures import DEFAULT_PARTS, write_package, worksheet_xml

    parts = dict(DEFAULT_PARTS)
    parts["xl/worksheets/sheet1.xml"] = worksheet_xml('<row r="1"/>')
    write_package(tmp_path / "book.xlsx", parts)
"""

import zipfile
from collections.abc import Mapping
from pathlib import Path

MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOC_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PKG_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

OFFICE_DOCUMENT_TYPE = f"{DOC_REL_NS}/officeDocument"
WORKSHEET_TYPE = f"{DOC_REL_NS}/worksheet"
SHARED_STRINGS_TYPE = f"{DOC_REL_NS}/sharedStrings"
STYLES_TYPE = f"{DOC_REL_NS}/styles"

ROOT_RELS = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="{PKG_REL_NS}">
  <Relationship Id="rIdDoc" Type="{OFFICE_DOCUMENT_TYPE}" Target="/xl/workbook.xml"/>
</Relationships>"""

WORKBOOK_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<workbook xmlns="{MAIN_NS}" xmlns:r="{DOC_REL_NS}">
  <sheets>
    <sheet name="Data" sheetId="1" r:id="rIdSheet1"/>
    <sheet name="Summary" sheetId="2" r:id="rIdSheet2"/>
  </sheets>
</workbook>"""

WORKBOOK_RELS = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="{PKG_REL_NS}">
  <Relationship Id="rIdSheet1" Type="{WORKSHEET_TYPE}" Target="/xl/worksheets/sheet1.xml"/>
  <Relationship Id="rIdSheet2" Type="{WORKSHEET_TYPE}" Target="/xl/worksheets/sheet2.xml"/>
  <Relationship Id="rIdStrings" Type="{SHARED_STRINGS_TYPE}" Target="/xl/sharedStrings.xml"/>
</Relationships>"""

# Five entries: the rich-text <si> contributes one entry per run.
SHARED_STRINGS_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<sst xmlns="{MAIN_NS}" count="4" uniqueCount="4">
  <si><t>Name</t></si>
  <si><t>Amount</t></si>
  <si><t>Alice</t></si>
  <si><r><t>Bo</t></r><r><rPr><b/></rPr><t>b</t></r></si>
</sst>"""

SHEET1_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="{MAIN_NS}">
  <sheetData>
    <row r="1"><c r="A1" t="s"><v>0</v></c><c r="B1" t="s"><v>1</v></c></row>
    <row r="2"><c r="A2" t="s"><v>2</v></c><c r="B2" t="n"><v>42</v></c></row>
    <row r="5"><c r="A5" t="n"><v>3.14</v></c><c r="B5"/><c r="D5"><v>7</v></c></row>
  </sheetData>
</worksheet>"""

SHEET2_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="{MAIN_NS}"><sheetData/></worksheet>"""

DEFAULT_PARTS: dict[str, str | bytes] = {
    "_rels/.rels": ROOT_RELS,
    "xl/workbook.xml": WORKBOOK_XML,
    "xl/_rels/workbook.xml.rels": WORKBOOK_RELS,
    "xl/sharedStrings.xml": SHARED_STRINGS_XML,
    "xl/worksheets/sheet1.xml": SHEET1_XML,
    "xl/worksheets/sheet2.xml": SHEET2_XML,
}


def worksheet_xml(rows: str) -> str:
    """Wrap ``<row>`` markup in a worksheet document."""
    return f'<worksheet xmlns="{MAIN_NS}"><sheetData>{rows}</sheetData></worksheet>'


def shared_strings_xml(*strings: str) -> str:
    """Build a shared string part with one plain ``<si>`` per string."""
    body = "".join(f"<si><t>{text}</t></si>" for text in strings)
    return f'<sst xmlns="{MAIN_NS}">{body}</sst>'


def rels_xml(*relationships: tuple[str, str, str]) -> str:
    """Build a ``.rels`` part from ``(id, type, target)`` triples."""
    body = "".join(
        f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return f'<Relationships xmlns="{PKG_REL_NS}">{body}</Relationships>'


def write_package(path: Path, parts: Mapping[str, str | bytes | None]) -> Path:
    """Write ``parts`` into a ZIP archive at ``path``, in mapping order.

    Parts whose value is None are skipped.
    """
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in parts.items():
            if data is not None:
                archive.writestr(name, data)
    return path
