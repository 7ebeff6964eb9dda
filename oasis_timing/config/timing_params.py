################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Mapping

from oasis_timing.math_utils.validation import as_finite_float


@dataclass(frozen=True, slots=True)
class TimingParams:
    """Timing parameters relating a timespace to its parent.

    Responsibility:
        Hold the three values of the linear media-timing equation that maps a
        parent time onto a nested local time.

    Data contract:
        - begin_time: seconds in the parent timespace at which the nested
          timespace starts. Scaled by speed.
        - time_offset: seconds in the local timespace added after scaling.
        - speed: unitless rate of local time relative to parent time. Zero
          means paused; negative values run local time backward.

    Equations:
        local_time = (parent_time - begin_time) * speed + time_offset

    Determinism and edge cases:
        - All values must be finite; NaN or infinity is rejected on
          construction so it can never reach a conversion result.
        - Instances are immutable. Pause, resume and speed changes produce
          new instances.
    """

    begin_time: float = 0.0
    time_offset: float = 0.0
    speed: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "begin_time", as_finite_float(self.begin_time, "begin_time")
        )
        object.__setattr__(
            self, "time_offset", as_finite_float(self.time_offset, "time_offset")
        )
        object.__setattr__(self, "speed", as_finite_float(self.speed, "speed"))

    @staticmethod
    def defaults() -> TimingParams:
        """Return the identity mapping (local time equals parent time)."""
        return TimingParams()

    @property
    def is_paused(self) -> bool:
        return self.speed == 0.0

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> TimingParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: TimingParams = cls.defaults()
        return cls(
            begin_time=as_finite_float(
                params.get("begin_time", defaults.begin_time), "begin_time"
            ),
            time_offset=as_finite_float(
                params.get("time_offset", defaults.time_offset), "time_offset"
            ),
            speed=as_finite_float(params.get("speed", defaults.speed), "speed"),
        )

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        as_finite_float(self.begin_time, "begin_time")
        as_finite_float(self.time_offset, "time_offset")
        as_finite_float(self.speed, "speed")

    def replace(self, **changes: float) -> TimingParams:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "begin_time": self.begin_time,
            "time_offset": self.time_offset,
            "speed": self.speed,
        }

    @staticmethod
    def _field_order() -> tuple[str, ...]:
        return ("begin_time", "time_offset", "speed")
