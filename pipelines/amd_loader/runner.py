"""Execution wrapper for the AMD loader pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

from pipelines.amd_loader.generator import (  # type: ignore[import]
    LoaderArtifacts,
    generate,
)
from pipelines.amd_loader.spec import Spec  # type: ignore[import]
from pipelines.common.checksum import write_all_if_changed  # type: ignore[import]
from references import (  # type: ignore[import]
    Diagnostic,
    GeneratedFiles,
    ReferenceSet,
    parse_references,
)


@dataclass(slots=True)
class RunResult:
    """Outcome of one loader target run."""

    spec: Spec
    references: Optional[ReferenceSet] = None
    artifacts: Optional[LoaderArtifacts] = None
    written: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def run(spec: Spec) -> RunResult:
    """Parse the reference file for ``spec`` and write its loader artifacts."""

    result = RunResult(spec=spec)
    reference_path = Path(spec.reference_path)

    if not reference_path.is_file():
        result.diagnostics.append(
            Diagnostic.info(
                "missing-reference-file",
                "Cannot generate amd loader unless a reference file is"
                f" present: {reference_path}",
            )
        )
        return result

    logger.debug("Generating amdloader from reference file {}", reference_path)
    generated = GeneratedFiles.from_paths(
        spec.generated_files, str(reference_path.parent)
    )
    references = parse_references(reference_path, reference_path.parent, generated)
    result.references = references
    result.diagnostics.extend(references.diagnostics)
    logger.debug("Files: {}", ", ".join(references.all))

    if spec.out_dir is None:
        result.diagnostics.append(
            Diagnostic.info(
                "no-out-dir",
                f"No out_dir configured for target {spec.name};"
                " skipping loader generation",
            )
        )
        return result

    artifacts = generate(
        references,
        out_dir=spec.out_dir,
        loader_path=spec.loader_path,
        eol=spec.eol,
    )
    result.artifacts = artifacts
    result.diagnostics.extend(
        Diagnostic(
            level=diagnostic.level,
            code=diagnostic.code,
            message=f"{diagnostic.message}: {reference_path}",
        )
        for diagnostic in artifacts.diagnostics
    )

    payloads = {
        artifacts.bundle_path: artifacts.bundle_text.encode("utf-8"),
        artifacts.loader_path: artifacts.loader_text.encode("utf-8"),
    }
    result.written = write_all_if_changed(payloads)
    result.unchanged = [path for path in payloads if path not in result.written]
    for path in result.written:
        logger.debug("AMD loader artifact written {}", path)

    return result
