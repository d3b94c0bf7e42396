"""Path helpers for relocating source references into an output tree."""

from __future__ import annotations

import os
from typing import Iterable, Optional


def common_directory(files: Iterable[str]) -> Optional[str]:
    """Return the longest directory shared by every file, or None if empty.

    The prefix is computed over whole path segments, so ``/src/app`` and
    ``/src/apple`` share ``/src`` rather than ``/src/app``.
    """

    directories = [os.path.dirname(os.path.abspath(path)) for path in files]
    if not directories:
        return None
    return os.path.commonpath(directories)


def relocate(path: str, source_root: str, target_root: str) -> str:
    """Move ``path`` from under ``source_root`` to under ``target_root``."""

    return os.path.join(target_root, os.path.relpath(path, source_root))


def relative_module_id(target: str, loader_dir: str) -> str:
    """Return ``target`` relative to ``loader_dir`` as an explicit ``./`` id."""

    relative = os.path.relpath(target, loader_dir)
    return "./" + relative.replace(os.sep, "/")
