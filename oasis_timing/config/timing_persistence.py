################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Reading and writing timing configuration files.

Files hold one YAML document in the schema of timing_yaml. Writes go to a
hidden sibling file first and are renamed over the target, so a reader never
observes a half-written configuration. Every failure surfaces as
TimingPersistenceError with the underlying OSError or TimingYamlError
chained as its cause.
"""

from __future__ import annotations

import os
from pathlib import Path

from oasis_timing.config.timing_yaml import TimingConfigYaml
from oasis_timing.config.timing_yaml import TimingYamlError
from oasis_timing.config.timing_yaml import dumps_yaml
from oasis_timing.config.timing_yaml import loads_yaml


CONFIG_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})


class TimingPersistenceError(Exception):
    """Raised when a timing configuration file cannot be read or written."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path names a YAML timing configuration."""
    return Path(os.fspath(path)).suffix.lower() in CONFIG_SUFFIXES


def save_yaml_config(
    path: str | os.PathLike[str],
    config: TimingConfigYaml,
    *,
    atomic_write: bool = True,
) -> None:
    """Write a timing configuration, creating parent directories as needed."""
    config_path: Path = _config_path(path)
    try:
        text: str = dumps_yaml(config)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        if atomic_write:
            _replace_with_text(config_path, text)
        else:
            config_path.write_text(text, encoding="utf-8")
    except (OSError, TimingYamlError) as exc:
        raise TimingPersistenceError(
            f"Cannot write timing config {config_path}: {exc}"
        ) from exc


def load_yaml_config(path: str | os.PathLike[str]) -> TimingConfigYaml:
    """Read and validate a timing configuration."""
    config_path: Path = _config_path(path)
    try:
        return loads_yaml(config_path.read_text(encoding="utf-8"))
    except (OSError, TimingYamlError) as exc:
        raise TimingPersistenceError(
            f"Cannot read timing config {config_path}: {exc}"
        ) from exc


def _config_path(path: str | os.PathLike[str]) -> Path:
    if not is_yaml_path(path):
        raise TimingPersistenceError(
            f"Timing config path must end with .yaml or .yml: {os.fspath(path)}"
        )
    return Path(os.fspath(path))


def _replace_with_text(target: Path, text: str) -> None:
    staging: Path = target.with_name(f".{target.name}.tmp.{os.getpid()}")
    try:
        with staging.open("w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staging, target)
    finally:
        # Staging file only survives when the rename failed
        staging.unlink(missing_ok=True)
