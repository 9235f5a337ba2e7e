"""ZIP container access for spreadsheet packages."""

from __future__ import annotations

import zipfile
import zlib
from pathlib import Path
from types import TracebackType

from xlsx_cell_reader.config import Settings, settings as default_settings
from xlsx_cell_reader.utils.exceptions import (
    ArchiveFormatError,
    ArchiveNotFoundError,
    ArchiveReadError,
    PartNotFoundError,
    PartTooLargeError,
)
from xlsx_cell_reader.utils.logging import get_logger

logger = get_logger(__name__)


class Archive:
    """Read-only view of the parts stored in a spreadsheet package.

    Parts are always read whole; the reader never needs to seek inside a
    compressed entry.
    """

    def __init__(
        self,
        zip_file: zipfile.ZipFile,
        path: Path,
        max_part_size_bytes: int,
    ) -> None:
        self._zip = zip_file
        self._path = path
        self._max_part_size_bytes = max_part_size_bytes

    @classmethod
    def open(cls, path: str | Path, settings: Settings | None = None) -> Archive:
        """Open the package at ``path``.

        Raises:
            ArchiveNotFoundError: If the file does not exist.
            ArchiveFormatError: If the file is not a ZIP archive.
            ArchiveReadError: If the file cannot be read.
        """
        opts = settings or default_settings
        file_path = Path(path)
        if not file_path.exists():
            raise ArchiveNotFoundError(str(file_path))

        try:
            zip_file = zipfile.ZipFile(file_path)
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(
                f"Not a ZIP archive: {e}", file_path=str(file_path)
            ) from e
        except OSError as e:
            raise ArchiveReadError(
                f"Failed to open archive: {e}", file_path=str(file_path)
            ) from e

        logger.debug(
            "Opened archive", path=str(file_path), entries=len(zip_file.infolist())
        )
        return cls(zip_file, file_path, opts.max_part_size_bytes)

    @property
    def path(self) -> Path:
        return self._path

    def names(self) -> list[str]:
        """Entry names in index order."""
        return [info.filename for info in self._zip.infolist()]

    def __contains__(self, name: object) -> bool:
        return name in self._zip.namelist()

    def read(self, name: str) -> bytes:
        """Read and decompress one part.

        Raises:
            PartNotFoundError: If ``name`` is not an entry of the archive.
            PartTooLargeError: If the uncompressed size exceeds the limit.
            ArchiveFormatError: If the entry data is corrupt.
            ArchiveReadError: If the underlying file cannot be read or the
                archive was closed.
        """
        if self._zip.fp is None:
            raise ArchiveReadError(
                "Archive is closed", file_path=str(self._path), part_name=name
            )

        try:
            info = self._zip.getinfo(name)
        except KeyError as e:
            raise PartNotFoundError(name, file_path=str(self._path)) from e

        if info.file_size > self._max_part_size_bytes:
            raise PartTooLargeError(
                part_name=name,
                part_size=info.file_size,
                max_size=self._max_part_size_bytes,
                file_path=str(self._path),
            )

        try:
            data = self._zip.read(info)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise ArchiveFormatError(
                f"Corrupt archive entry: {e}",
                file_path=str(self._path),
                part_name=name,
            ) from e
        except OSError as e:
            raise ArchiveReadError(
                f"Failed to read archive entry: {e}",
                file_path=str(self._path),
                part_name=name,
            ) from e

        logger.debug("Read part", part=name, size=len(data))
        return data

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> Archive:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
