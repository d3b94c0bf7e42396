"""Shared fixtures for the loader pipeline tests."""

from pathlib import Path
from typing import Callable, Iterable

import pytest


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(source_root: Path) -> Callable[[Iterable[str]], Path]:
    """Write ``lines`` to ``src/reference.ts`` and return its path."""

    def _write(lines: Iterable[str], name: str = "reference.ts") -> Path:
        manifest = source_root / name
        manifest.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return manifest

    return _write


@pytest.fixture
def sample_lines() -> list:
    return [
        '/// <reference path="a.ts" />',
        "//grunt-start",
        '/// <reference path="b.ts" />',
        "//grunt-end",
        '/// <reference path="c.ts" />',
    ]
