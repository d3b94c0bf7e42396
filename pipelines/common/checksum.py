"""Checksum utilities to keep writes idempotent."""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Mapping, Optional


def sha256_bytes(data: bytes) -> str:
    digest = hashlib.sha256()
    digest.update(data)
    return digest.hexdigest()


def sha256_file(path: Path) -> str | None:
    if not path.exists():
        return None
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_all_if_changed(payloads: Mapping[Path, bytes]) -> List[Path]:
    """Write every changed payload, or none of them.

    Changed payloads are staged to temporary files next to their targets and
    only moved into place once all of them were staged. If moving one into
    place fails, targets already replaced get their previous content back
    and leftover temporary files are removed. Returns the paths that were
    rewritten.
    """

    changed = {
        Path(path): data
        for path, data in payloads.items()
        if sha256_file(Path(path)) != sha256_bytes(data)
    }

    previous = {
        path: path.read_bytes() if path.exists() else None for path in changed
    }

    staged: Dict[Path, Path] = {}
    try:
        for path, data in changed.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            staged[path] = Path(temp_name)
            with os.fdopen(handle, "wb") as temp_file:
                temp_file.write(data)
    except OSError:
        for temp_path in staged.values():
            temp_path.unlink(missing_ok=True)
        raise

    committed: List[Path] = []
    try:
        for path, temp_path in staged.items():
            os.replace(temp_path, path)
            committed.append(path)
    except OSError:
        for temp_path in staged.values():
            temp_path.unlink(missing_ok=True)
        for path in committed:
            _restore(path, previous[path])
        raise
    return committed


def _restore(path: Path, content: Optional[bytes]) -> None:
    if content is None:
        path.unlink(missing_ok=True)
    else:
        path.write_bytes(content)
