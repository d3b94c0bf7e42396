"""Membership checks against the externally supplied generated-file list."""

from __future__ import annotations

import os
from bisect import bisect_left
from typing import Iterable, Iterator, List, Sequence


def is_generated(candidate: str, sorted_paths: Sequence[str]) -> bool:
    """Return True when ``candidate`` is in the ascending ``sorted_paths``."""

    index = bisect_left(sorted_paths, candidate)
    return index < len(sorted_paths) and sorted_paths[index] == candidate


class GeneratedFiles:
    """Sorted, exact-match view over generated module paths."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: List[str] = sorted(paths)

    @classmethod
    def from_paths(cls, paths: Iterable[str], base_dir: str) -> "GeneratedFiles":
        """Build the set after resolving each path against ``base_dir``."""

        return cls(
            _resolve(path, base_dir)
            for path in paths
        )

    def __contains__(self, candidate: object) -> bool:
        if not isinstance(candidate, str):
            return False
        return is_generated(candidate, self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)


def _resolve(path: str, base_dir: str) -> str:
    expanded = os.path.expanduser(path)
    return os.path.normpath(os.path.join(os.path.abspath(base_dir), expanded))
