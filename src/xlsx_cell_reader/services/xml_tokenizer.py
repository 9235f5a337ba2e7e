"""Pull-style XML event stream over ``xml.sax``.

Element and attribute names are reported by local name only, so
``r:id`` and ``id`` both read as ``id``. Adjacent text chunks are merged into
a single event, and text made only of XML whitespace is reported as
``WHITESPACE`` rather than ``CHARACTERS``.
"""

from __future__ import annotations

import xml.sax
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO
from xml.parsers import expat
from xml.sax.handler import ContentHandler, feature_namespaces
from xml.sax.xmlreader import AttributesNSImpl

from xlsx_cell_reader.utils.exceptions import EncodingError, XmlReadError

CHUNK_SIZE = 64 * 1024

_XML_WHITESPACE = " \t\r\n"

_ENCODING_ERROR_CODES = frozenset(
    {
        expat.errors.codes[expat.errors.XML_ERROR_UNKNOWN_ENCODING],
        expat.errors.codes[expat.errors.XML_ERROR_INCORRECT_ENCODING],
    }
)


class XmlEventType(str, Enum):
    """Kind of a tokenizer event."""

    START_ELEMENT = "start_element"
    END_ELEMENT = "end_element"
    CHARACTERS = "characters"
    WHITESPACE = "whitespace"
    END_DOCUMENT = "end_document"


@dataclass(frozen=True)
class XmlEvent:
    """One tokenizer event.

    ``name`` is set for element events, ``attributes`` for start elements
    (in document order) and ``text`` for character events.
    """

    type: XmlEventType
    name: str = ""
    attributes: tuple[tuple[str, str], ...] = ()
    text: str = ""

    def attribute(self, local_name: str) -> str | None:
        """Value of the attribute named ``local_name``.

        If several attributes share a local name the last one wins.
        """
        found = None
        for name, value in self.attributes:
            if name == local_name:
                found = value
        return found


class _EventCollector(ContentHandler):
    def __init__(self) -> None:
        super().__init__()
        self.events: list[XmlEvent] = []
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if not self._text:
            return
        text = "".join(self._text)
        self._text = []
        if text.strip(_XML_WHITESPACE):
            self.events.append(XmlEvent(XmlEventType.CHARACTERS, text=text))
        else:
            self.events.append(XmlEvent(XmlEventType.WHITESPACE, text=text))

    def startElementNS(
        self,
        name: tuple[str | None, str],
        qname: str | None,
        attrs: AttributesNSImpl,
    ) -> None:
        self._flush_text()
        attributes = tuple((key[1], value) for key, value in attrs.items())
        self.events.append(
            XmlEvent(XmlEventType.START_ELEMENT, name=name[1], attributes=attributes)
        )

    def endElementNS(self, name: tuple[str | None, str], qname: str | None) -> None:
        self._flush_text()
        self.events.append(XmlEvent(XmlEventType.END_ELEMENT, name=name[1]))

    def characters(self, content: str) -> None:
        self._text.append(content)

    def ignorableWhitespace(self, whitespace: str) -> None:
        self._text.append(whitespace)

    def endDocument(self) -> None:
        self._flush_text()
        self.events.append(XmlEvent(XmlEventType.END_DOCUMENT))

    def drain(self) -> list[XmlEvent]:
        events, self.events = self.events, []
        return events


def tokenize(stream: BinaryIO, part_name: str | None = None) -> Iterator[XmlEvent]:
    """Yield the XML events of ``stream`` from its current position.

    Args:
        stream: Binary stream, already positioned after any byte-order mark.
        part_name: Archive entry name, used in error details.

    Raises:
        XmlReadError: If the content is not well-formed XML.
        EncodingError: If the declared encoding is unknown or does not match
            the bytes.
    """
    collector = _EventCollector()
    parser = xml.sax.make_parser()
    parser.setFeature(feature_namespaces, True)
    parser.setContentHandler(collector)

    try:
        # Start the document up front so an empty stream fails on close().
        parser.feed(b"")
        while chunk := stream.read(CHUNK_SIZE):
            parser.feed(chunk)
            yield from collector.drain()
        parser.close()
    except xml.sax.SAXParseException as e:
        message = e.getMessage()
        if getattr(e.getException(), "code", None) in _ENCODING_ERROR_CODES:
            raise EncodingError(
                f"Cannot decode XML: {message}", part_name=part_name
            ) from e
        raise XmlReadError(
            f"Malformed XML: {message}",
            part_name=part_name,
            line=e.getLineNumber(),
            column=e.getColumnNumber(),
        ) from e
    except xml.sax.SAXException as e:
        raise XmlReadError(f"XML read failed: {e}", part_name=part_name) from e
    except LookupError as e:
        # pyexpat surfaces a failed codec lookup for the declared encoding.
        raise EncodingError(f"Unknown XML encoding: {e}", part_name=part_name) from e
    yield from collector.drain()
