from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

NEWLINES = {"lf": "\n", "crlf": "\r\n"}


@dataclass(slots=True)
class Spec:
    """Inputs controlling a single AMD loader target."""

    reference_path: Path
    loader_path: Path
    out_dir: Optional[Path] = None
    generated_files: List[str] = field(default_factory=list)
    newline: str = "lf"
    name: str = "default"

    @property
    def eol(self) -> str:
        return NEWLINES[self.newline]
