from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from tests.fixtures import DEFAULT_PARTS, write_package
from xlsx_cell_reader.config import Settings
from xlsx_cell_reader.utils.logging import clear_context

XlsxFactory = Callable[..., Path]


@pytest.fixture
def make_xlsx(tmp_path: Path) -> XlsxFactory:
    """Factory writing a package from the default parts.

    ``parts`` replaces the default parts entirely; ``overrides`` changes
    individual parts, and a ``None`` override drops a part.
    """
    counter = 0

    def _make(
        parts: Mapping[str, str | bytes] | None = None,
        overrides: Mapping[str, str | bytes | None] | None = None,
    ) -> Path:
        nonlocal counter
        counter += 1
        contents: dict[str, str | bytes | None] = dict(
            DEFAULT_PARTS if parts is None else parts
        )
        contents.update(overrides or {})
        return write_package(tmp_path / f"book{counter}.xlsx", contents)

    return _make


@pytest.fixture
def xlsx_path(make_xlsx: XlsxFactory) -> Path:
    return make_xlsx()


@pytest.fixture
def global_settings() -> Settings:
    return Settings(_env_file=None, relationship_scope="global")


@pytest.fixture
def part_settings() -> Settings:
    return Settings(_env_file=None, relationship_scope="part")


@pytest.fixture(autouse=True)
def _reset_log_context() -> None:
    clear_context()
