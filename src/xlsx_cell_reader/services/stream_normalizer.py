"""Byte-order-mark handling for XML parts.

The tokenizer is handed a stream positioned after any byte-order mark, so a
BOM never reaches it as content.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from xlsx_cell_reader.utils.exceptions import ArchiveReadError

# Longer markers first: UTF-32LE starts with the UTF-16LE marker.
BYTE_ORDER_MARKS: tuple[tuple[str, bytes], ...] = (
    ("utf-32-be", b"\x00\x00\xfe\xff"),
    ("utf-32-le", b"\xff\xfe\x00\x00"),
    ("utf-8", b"\xef\xbb\xbf"),
    ("utf-16-be", b"\xfe\xff"),
    ("utf-16-le", b"\xff\xfe"),
)


def detect_bom(prefix: bytes) -> tuple[str, bytes] | None:
    """Return ``(encoding, marker)`` for the BOM ``prefix`` starts with."""
    for encoding, marker in BYTE_ORDER_MARKS:
        if prefix.startswith(marker):
            return encoding, marker
    return None


def skip_bom(stream: BinaryIO) -> int:
    """Position ``stream`` just past a leading byte-order mark.

    Reads the first four bytes, then seeks past exactly the recognised marker
    or back to the start when there is none.

    Args:
        stream: Seekable binary stream.

    Returns:
        Number of bytes skipped.

    Raises:
        ArchiveReadError: If reading or seeking the stream fails.
    """
    try:
        stream.seek(0)
        prefix = stream.read(4)
        match = detect_bom(prefix)
        skipped = len(match[1]) if match else 0
        stream.seek(skipped)
    except OSError as e:
        raise ArchiveReadError(f"Failed to inspect byte-order mark: {e}") from e
    return skipped


def normalize_part(data: bytes) -> io.BytesIO:
    """Wrap a fully buffered part and position it after any BOM."""
    stream = io.BytesIO(data)
    skip_bom(stream)
    return stream
