"""Shared dataclasses for reference classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Tuple

GROUP_NAMES = ("before", "generated", "unordered", "after")


class ReferenceOrder(Enum):
    """Manifest region currently being scanned."""

    BEFORE = "before"
    UNORDERED = "unordered"
    AFTER = "after"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    ReferenceOrder.BEFORE: 0,
    ReferenceOrder.UNORDERED: 1,
    ReferenceOrder.AFTER: 2,
}


@dataclass(slots=True)
class Diagnostic:
    """A structured warning or notice returned by a pipeline stage."""

    level: str
    code: str
    message: str

    @classmethod
    def info(cls, code: str, message: str) -> "Diagnostic":
        return cls(level="info", code=code, message=message)

    @classmethod
    def warning(cls, code: str, message: str) -> "Diagnostic":
        return cls(level="warning", code=code, message=message)


@dataclass(slots=True)
class ReferenceSet:
    """Referenced files grouped by load order."""

    before: List[str] = field(default_factory=list)
    generated: List[str] = field(default_factory=list)
    unordered: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def all(self) -> List[str]:
        return self.before + self.generated + self.unordered + self.after

    def groups(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield ``(name, files)`` pairs in load order."""

        for name in GROUP_NAMES:
            yield name, getattr(self, name)

    def map(self, transform: Callable[[List[str]], List[str]]) -> "ReferenceSet":
        """Return a new set with ``transform`` applied to every group."""

        return ReferenceSet(
            before=transform(list(self.before)),
            generated=transform(list(self.generated)),
            unordered=transform(list(self.unordered)),
            after=transform(list(self.after)),
            diagnostics=list(self.diagnostics),
        )
