"""Helpers for resolving configuration files and loader targets."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pipelines.amd_loader.spec import NEWLINES, Spec  # type: ignore[import]

DEFAULT_CONFIG_NAME = "amdloader.json"
DEFAULT_TARGET = "default"
TARGET_KEYS = (
    "reference_path",
    "loader_path",
    "out_dir",
    "generated_files",
    "newline",
)


class ConfigError(Exception):
    """Raised when runtime configuration cannot be loaded."""


def _resolve_config_path(path: Optional[str]) -> str:
    """Return the absolute config path, honoring overrides and defaults."""
    env_override = os.environ.get("AMD_LOADER_CONFIG")
    candidate = path or env_override or DEFAULT_CONFIG_NAME
    expanded = os.path.expanduser(candidate)
    if os.path.isabs(expanded) and os.path.isfile(expanded):
        return expanded

    search_roots = [os.getcwd(), os.path.dirname(__file__)]
    for root in search_roots:
        resolved = os.path.abspath(os.path.join(root, expanded))
        if os.path.isfile(resolved):
            return resolved

    raise ConfigError(f"Configuration file not found: {candidate}")


def _resolve_path(value: str, base_dir: str) -> str:
    """Resolve ``value`` into an absolute path relative to ``base_dir``."""
    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(os.path.join(base_dir, expanded))


def _normalize(data: Dict[str, Any], base_dir: str) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str) and key.endswith(("_dir", "_path")):
            resolved[key] = _resolve_path(value, base_dir)
        elif key == "generated_files":
            if not isinstance(value, list) or not all(
                isinstance(item, str) for item in value
            ):
                raise ConfigError("generated_files must be a list of paths.")
            resolved[key] = [_resolve_path(item, base_dir) for item in value]
        else:
            resolved[key] = value
    return resolved


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON config file and normalize any filesystem paths."""
    config_path = _resolve_config_path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")

    base_dir = os.path.dirname(config_path)
    targets = data.pop("targets", None)
    resolved = _normalize(data, base_dir)
    if targets is not None:
        if not isinstance(targets, dict):
            raise ConfigError("targets must map target names to settings.")
        resolved_targets: Dict[str, Any] = {}
        for name, settings in targets.items():
            if not isinstance(settings, dict):
                raise ConfigError(f"Target {name!r} must be a JSON object.")
            resolved_targets[name] = _normalize(settings, base_dir)
        resolved["targets"] = resolved_targets
    return resolved


def build_spec(name: str, settings: Dict[str, Any]) -> Spec:
    """Turn resolved settings into a ``Spec``, validating required keys."""
    reference_path = settings.get("reference_path")
    loader_path = settings.get("loader_path")
    if not reference_path:
        raise ConfigError(f"Missing reference_path for target {name!r}.")
    if not loader_path:
        raise ConfigError(f"Missing loader_path for target {name!r}.")

    newline = settings.get("newline", "lf")
    if newline not in NEWLINES:
        raise ConfigError(
            f"Unsupported newline {newline!r}; expected one of"
            f" {', '.join(sorted(NEWLINES))}."
        )

    out_dir = settings.get("out_dir")
    return Spec(
        reference_path=Path(reference_path),
        loader_path=Path(loader_path),
        out_dir=Path(out_dir) if out_dir else None,
        generated_files=list(settings.get("generated_files") or []),
        newline=newline,
        name=name,
    )


def resolve_targets(
    *,
    config_path: Optional[str] = None,
    targets: Optional[List[str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> List[Spec]:
    """Resolve loader targets by combining CLI overrides with config.

    Without a config file the overrides alone must describe a target.
    """
    overrides = {
        key: value for key, value in (overrides or {}).items() if value
    }
    try:
        resolved_config = _resolve_config_path(config_path)
    except ConfigError:
        if config_path or not overrides:
            raise
        config: Dict[str, Any] = {}
    else:
        config = load_config(resolved_config)

    shared = {key: config[key] for key in TARGET_KEYS if key in config}
    configured = config.get("targets") or {DEFAULT_TARGET: {}}

    selected = targets or list(configured)
    unknown = [name for name in selected if name not in configured]
    if unknown:
        raise ConfigError(f"Unknown target(s): {', '.join(unknown)}")

    cwd = os.getcwd()
    cli_settings = _normalize(overrides, cwd)
    return [
        build_spec(name, {**shared, **configured[name], **cli_settings})
        for name in selected
    ]
