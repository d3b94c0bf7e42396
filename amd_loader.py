"""Generate ordered AMD loader scripts from annotated reference files."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from loguru import logger

from config_loader import ConfigError, resolve_targets
from pipelines.amd_loader import RunResult, run  # type: ignore[import]
from pipelines.amd_loader.rewriter import (  # type: ignore[import]
    SourceExtensionError,
)
from references import ManifestFormatError  # type: ignore[import]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Build and parse the CLI switches for loader generation."""

    parser = argparse.ArgumentParser(
        description=(
            "Read a reference file with //grunt-start and //grunt-end"
            " markers and write an AMD loader that enforces its order."
        )
    )
    parser.add_argument(
        "--config", help="Path to config JSON file (default amdloader.json)."
    )
    parser.add_argument(
        "--target",
        action="append",
        dest="targets",
        help="Only build the named target. May be repeated.",
    )
    parser.add_argument("--reference", help="Override the reference file.")
    parser.add_argument("--loader", help="Override the loader script path.")
    parser.add_argument(
        "--out-dir", help="Override the compiled output directory."
    )
    parser.add_argument(
        "--generated",
        action="append",
        help="Path of a generated source file. May be repeated.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log group contents and path rewriting details.",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def report(result: RunResult) -> None:
    """Print the outcome of one target the way the other pipelines do."""

    for diagnostic in result.diagnostics:
        logger.log(
            diagnostic.level.upper(),
            "[{}] {}: {}",
            result.spec.name,
            diagnostic.code,
            diagnostic.message,
        )
    for path in result.written:
        print(f"✅ AMD loader artifact written: {path}")
    for path in result.unchanged:
        print(f"⏭️ AMD loader artifact unchanged: {path}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint that builds every selected loader target."""

    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        specs = resolve_targets(
            config_path=args.config,
            targets=args.targets,
            overrides={
                "reference_path": args.reference,
                "loader_path": args.loader,
                "out_dir": args.out_dir,
                "generated_files": args.generated,
            },
        )
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    for spec in specs:
        try:
            result = run(spec)
        except (ManifestFormatError, SourceExtensionError) as exc:
            raise SystemExit(f"[{spec.name}] {exc}") from exc
        report(result)


if __name__ == "__main__":
    main()
