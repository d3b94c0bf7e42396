"""Remap source references onto the compiled output tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from loguru import logger

from pipelines.common.paths import (  # type: ignore[import]
    common_directory,
    relative_module_id,
    relocate,
)
from references.models import ReferenceSet  # type: ignore[import]

SOURCE_EXTENSION = ".ts"


class SourceExtensionError(ValueError):
    """Raised when a referenced file does not carry the source extension."""


def rewrite_references(
    references: ReferenceSet,
    out_dir: Path | str,
    loader_path: Path | str,
) -> ReferenceSet:
    """Return ``references`` as module ids relative to the loader script.

    ``/src/ts/a.ts`` and ``/src/ts/inside/b.ts`` with ``out_dir=/src/js``
    become ``/src/js/a`` and ``/src/js/inside/b``, expressed relative to the
    directory holding ``loader_path``.
    """

    common_path = common_directory(references.all)
    if common_path is None:
        return references.map(lambda files: files)
    logger.debug("Found common path: {}", common_path)

    out_dir = os.path.abspath(out_dir)
    logger.debug("Using outDir: {}", out_dir)
    loader_dir = os.path.dirname(os.path.abspath(loader_path))

    def make_relative(files: List[str]) -> List[str]:
        rewritten: List[str] = []
        for file in files:
            if not file.endswith(SOURCE_EXTENSION):
                raise SourceExtensionError(
                    f"Expected a {SOURCE_EXTENSION} source file: {file}"
                )
            target = relocate(file, common_path, out_dir)
            target = target[: -len(SOURCE_EXTENSION)]
            rewritten.append(relative_module_id(target, loader_dir))
        return rewritten

    return references.map(make_relative)
