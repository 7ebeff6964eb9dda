################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML storage for timespace configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Optional

import yaml

from oasis_timing.config.timing_params import TimingParams
from oasis_timing.timing.basic_time import RepeatParams


FORMAT_VERSION: int = 1


class TimingYamlError(Exception):
    """Raised when the timing YAML schema is invalid."""


@dataclass(frozen=True)
class TimingConfigYaml:
    """Timing configuration stored in one YAML document.

    Attributes:
        timing: Parameters relating the timespace to its parent
        repeat: Optional repetition settings for basic local time
        format_version: Schema version of the document
    """

    timing: TimingParams
    repeat: Optional[RepeatParams] = None
    format_version: int = FORMAT_VERSION

    def __post_init__(self) -> None:
        """Validate field types."""
        if not isinstance(self.timing, TimingParams):
            raise TimingYamlError("timing must be TimingParams")
        if self.repeat is not None and not isinstance(self.repeat, RepeatParams):
            raise TimingYamlError("repeat must be RepeatParams or None")
        object.__setattr__(
            self,
            "format_version",
            _require_int(self.format_version, "format_version"),
        )


def config_to_dict(config: TimingConfigYaml) -> dict[str, object]:
    """Convert a configuration into a YAML-ready dictionary."""
    data: dict[str, object] = {
        "format_version": config.format_version,
        "timing": config.timing.as_dict(),
    }
    if config.repeat is not None:
        data["repeat"] = config.repeat.as_dict()
    return data


def config_from_dict(data: dict[str, object]) -> TimingConfigYaml:
    """Parse a YAML dictionary into a configuration."""
    if not isinstance(data, dict):
        raise TimingYamlError("YAML root must be a mapping")
    _require_keys(
        "root",
        data,
        required={"format_version", "timing"},
        optional={"repeat"},
    )

    format_version: int = _require_int(data["format_version"], "format_version")
    if format_version != FORMAT_VERSION:
        raise TimingYamlError(f"Unsupported format_version: {format_version}")

    try:
        timing: TimingParams = TimingParams.from_dict(
            _require_mapping(data["timing"], "timing")
        )
        repeat: Optional[RepeatParams] = None
        if data.get("repeat") is not None:
            repeat = RepeatParams.from_dict(
                _require_mapping(data["repeat"], "repeat")
            )
    except ValueError as exc:
        raise TimingYamlError(str(exc)) from exc

    return TimingConfigYaml(
        timing=timing,
        repeat=repeat,
        format_version=format_version,
    )


def dumps_yaml(config: TimingConfigYaml) -> str:
    """Serialize a configuration to deterministic YAML."""
    data: dict[str, object] = config_to_dict(config)
    return yaml.safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_yaml(text: str) -> TimingConfigYaml:
    """Parse a configuration from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TimingYamlError("Malformed YAML document") from exc
    if not isinstance(loaded, dict):
        raise TimingYamlError("YAML root must be a mapping")
    return config_from_dict(loaded)


def _require_keys(
    scope: str,
    data: dict[str, object],
    *,
    required: set[str],
    optional: set[str],
) -> None:
    """Ensure a mapping has the required keys and nothing unexpected."""
    unknown: set[str] = {
        key for key in data.keys() if key not in required and key not in optional
    }
    if unknown:
        raise TimingYamlError(
            f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}"
        )
    missing: set[str] = {key for key in required if key not in data}
    if missing:
        raise TimingYamlError(f"Missing keys in {scope}: {', '.join(sorted(missing))}")


def _require_mapping(value: object, name: str) -> dict[str, object]:
    """Ensure the value is a dictionary."""
    if not isinstance(value, dict):
        raise TimingYamlError(f"{name} must be a mapping")
    return value


def _require_int(value: object, name: str) -> int:
    """Ensure the value is an integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TimingYamlError(f"{name} must be an int")
    return value
