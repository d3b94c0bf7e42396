"""Build the nested AMD loader and the flat bundle from classified references."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import List, Sequence

from loguru import logger

from references.models import Diagnostic, ReferenceSet  # type: ignore[import]

from . import templates
from .rewriter import rewrite_references

DECLARATION_EXTENSION = ".d.ts"
BUNDLE_EXTENSION = ".bin.js"
LOADER_EXTENSION = ".js"


@dataclass(slots=True)
class LoaderArtifacts:
    """Rendered loader script and flat bundle ready to be written."""

    loader_path: Path
    bundle_path: Path
    loader_text: str
    bundle_text: str
    references: ReferenceSet
    diagnostics: List[Diagnostic] = field(default_factory=list)


def bundle_path_for(loader_path: Path | str) -> Path:
    """Return the sibling path of the flat bundle (``loader.js`` -> ``loader.bin.js``)."""

    loader_path = Path(loader_path)
    stem = loader_path.name
    if stem.endswith(LOADER_EXTENSION):
        stem = stem[: -len(LOADER_EXTENSION)]
    return loader_path.with_name(stem + BUNDLE_EXTENSION)


def filter_declarations(references: ReferenceSet) -> ReferenceSet:
    """Drop declaration-only files, which carry no runtime code."""

    return references.map(
        lambda files: [f for f in files if not f.endswith(DECLARATION_EXTENSION)]
    )


def _quote(files: Sequence[str], separator: str) -> str:
    return separator.join(f'"{file}"' for file in files)


def _require_each(files: Sequence[str], body: str, eol: str) -> str:
    """Nest one require per file so they load strictly in list order."""

    return reduce(
        lambda inner, file: templates.render_require(_quote([file], ""), inner, eol),
        reversed(files),
        body,
    )


def _require_batch(files: Sequence[str], body: str, eol: str) -> str:
    if not files:
        return body
    modules = _quote(files, "," + eol + "\t\t  ")
    return templates.render_require(modules, body, eol)


def build_load_chain(references: ReferenceSet, eol: str = "\n") -> str:
    """Return the loader script text for already rewritten references.

    The chain is built from the innermost call outwards: each after file,
    then one batch for unordered files, one batch for generated files, and
    finally each before file.
    """

    body = _require_each(references.after, "", eol)
    body = _require_batch(references.unordered, body, eol)
    body = _require_batch(references.generated, body, eol)
    body = _require_each(references.before, body, eol)
    return templates.render_module(body, eol)


def render_bundle(references: ReferenceSet) -> str:
    return templates.render_bundle(_quote(references.all, ","))


def generate(
    references: ReferenceSet,
    *,
    out_dir: Path | str,
    loader_path: Path | str,
    eol: str = "\n",
) -> LoaderArtifacts:
    """Filter, rewrite and render both loader artifacts without writing them."""

    loader_path = Path(loader_path)
    diagnostics: List[Diagnostic] = []

    runtime = filter_declarations(references)
    if not runtime.all:
        diagnostics.append(
            Diagnostic.warning(
                "no-files", "No runtime files left in reference file"
            )
        )
    for name, files in runtime.groups():
        if files:
            logger.debug("{}: {}", name.capitalize(), ", ".join(files))

    logger.debug("Making files relative to outDir...")
    rewritten = rewrite_references(runtime, out_dir, loader_path)

    return LoaderArtifacts(
        loader_path=loader_path,
        bundle_path=bundle_path_for(loader_path),
        loader_text=build_load_chain(rewritten, eol),
        bundle_text=render_bundle(rewritten),
        references=rewritten,
        diagnostics=diagnostics,
    )
