"""Classify the references of an annotated manifest into load-order groups.

A manifest is scanned top to bottom. References seen before the region-start
marker load first and in order, references inside the region load as a batch
(split into generated and plain files), and references after the region-end
marker load last and in order.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional

from .generated import GeneratedFiles
from .models import Diagnostic, ReferenceOrder, ReferenceSet

REFERENCE_INTRO = '/// <reference path="'
REFERENCE_PATTERN = re.compile(r'/// <reference path="([^"]+)"')
REGION_START = "//grunt-start"
REGION_END = "//grunt-end"


class ManifestFormatError(ValueError):
    """Raised when a reference line carries no well-formed quoted path."""

    def __init__(self, manifest: str, line_number: int, line: str) -> None:
        super().__init__(
            f"{manifest}:{line_number}: malformed reference line: {line!r}"
        )
        self.manifest = manifest
        self.line_number = line_number
        self.line = line


class ManifestEncodingError(ManifestFormatError):
    """Raised when the manifest is not valid UTF-8 text."""

    def __init__(self, manifest: str, offset: int, reason: str) -> None:
        ValueError.__init__(
            self, f"{manifest}: not valid UTF-8 at byte {offset}: {reason}"
        )
        self.manifest = manifest
        self.offset = offset
        self.line_number = None
        self.line = None


def parse_references(
    manifest_path: Path | str,
    base_path: Path | str | None = None,
    generated: GeneratedFiles | Iterable[str] | None = None,
) -> ReferenceSet:
    """Read ``manifest_path`` and return its references as absolute paths.

    ``base_path`` defaults to the manifest's directory. ``generated`` holds
    absolute paths; a reference inside the unordered region that resolves to
    one of them is classified as generated.
    """

    manifest_path = Path(manifest_path)
    base_dir = os.path.abspath(base_path or manifest_path.parent)
    if not isinstance(generated, GeneratedFiles):
        generated = GeneratedFiles(generated or ())

    references = ReferenceSet()
    state = ReferenceOrder.BEFORE

    try:
        text = manifest_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestEncodingError(
            str(manifest_path), exc.start, exc.reason
        ) from exc

    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()

        if REGION_START in line:
            state = _advance(
                state, ReferenceOrder.UNORDERED, references, line_number
            )
        if REGION_END in line:
            state = _advance(state, ReferenceOrder.AFTER, references, line_number)

        if REFERENCE_INTRO not in line:
            continue

        relative = _extract_path(line)
        if relative is None:
            raise ManifestFormatError(str(manifest_path), line_number, line)
        filename = os.path.normpath(os.path.join(base_dir, relative))

        if state is ReferenceOrder.BEFORE:
            references.before.append(filename)
        elif state is ReferenceOrder.AFTER:
            references.after.append(filename)
        elif filename in generated:
            references.generated.append(filename)
        else:
            references.unordered.append(filename)

    return references


def _extract_path(line: str) -> Optional[str]:
    match = REFERENCE_PATTERN.search(line)
    if match is None:
        return None
    return match.group(1)


def _advance(
    current: ReferenceOrder,
    target: ReferenceOrder,
    references: ReferenceSet,
    line_number: int,
) -> ReferenceOrder:
    """Move the scan state forward; markers that would not advance it are ignored."""

    if target.rank > current.rank:
        if current is ReferenceOrder.BEFORE and target is ReferenceOrder.AFTER:
            references.diagnostics.append(
                Diagnostic.warning(
                    "region-end-without-start",
                    f"line {line_number}: region end marker with no preceding"
                    " region start; remaining references load in order",
                )
            )
        return target

    marker = REGION_START if target is ReferenceOrder.UNORDERED else REGION_END
    references.diagnostics.append(
        Diagnostic.warning(
            "marker-out-of-order",
            f"line {line_number}: ignoring {marker} while already in the"
            f" {current.value} region",
        )
    )
    return current
