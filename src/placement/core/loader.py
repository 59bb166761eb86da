# placement/core/loader.py
"""
YAML loading helpers for board specs.
"""
from __future__ import annotations

import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively replace ``${VAR}`` and ``${VAR:-default}`` in strings.

    Dicts and lists are walked; other values are returned unchanged.

    Raises:
        ValueError: If a variable is unset and has no default.
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_env_replacement, value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def _env_replacement(match: re.Match) -> str:
    name, default = match.group(1), match.group(2)
    env_value = os.environ.get(name)
    if env_value is not None:
        return env_value
    if default is not None:
        return default
    raise ValueError(
        f"Environment variable '{name}' is not set and no default provided"
    )


def resolve_paths(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns into a sorted, de-duplicated list of files."""
    files: set[Path] = set()
    for pattern in patterns:
        files.update(Path(m).resolve() for m in glob(pattern))
    return sorted(files)


def load_yaml_files(
    patterns: Iterable[str], *, substitute_env: bool = True
) -> list[dict[str, Any]]:
    """
    Load every YAML document matching the glob patterns.

    Files are returned in sorted path order so callers merging them get
    deterministic "later file wins" behaviour.

    Args:
        patterns: Glob patterns for YAML files.
        substitute_env: Apply ``substitute_env_vars`` to each document.

    Returns:
        Parsed documents; empty files yield ``{}``.
    """
    patterns = list(patterns)
    files = resolve_paths(patterns)

    if not files:
        logger.warning("No config files found matching patterns: %s", patterns)
        return []

    logger.info("Loading config files: %s", [str(f) for f in files])

    out: list[dict[str, Any]] = []
    for f in files:
        try:
            with f.open("r", encoding="utf-8") as fh:
                content = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            logger.error("Failed to parse YAML file '%s': %s", f, exc)
            raise
        if not isinstance(content, dict):
            raise ValueError(f"Config file '{f}' must contain a mapping at top level")
        out.append(substitute_env_vars(content) if substitute_env else content)

    return out
