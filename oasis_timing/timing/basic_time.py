################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Folding of active local time into a single animation iteration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

import numpy as np
from numpy.typing import NDArray

from oasis_timing.math_utils.validation import as_finite_float
from oasis_timing.math_utils.validation import as_float
from oasis_timing.math_utils.validation import as_time_array
from oasis_timing.math_utils.validation import scalar_or_array


# Float bound of the int64 range; floor values at or above it overflow the cast
_MAX_ITERATION: float = float(np.iinfo(np.int64).max)


@dataclass(frozen=True, slots=True)
class RepeatParams:
    """Repetition settings for one iteration of an animation.

    Attributes:
        duration: Length of one iteration in local seconds, > 0
        repeat_count: Number of iterations, > 0; may be fractional or inf
        autoreverses: Whether each iteration plays forward then backward
    """

    duration: float
    repeat_count: float = 1.0
    autoreverses: bool = False

    def __post_init__(self) -> None:
        duration: float = as_finite_float(self.duration, "duration")
        if duration <= 0.0:
            raise ValueError("duration must be > 0")
        # Infinity repeats forever
        repeat_count: float = as_float(self.repeat_count, "repeat_count")
        if math.isnan(repeat_count) or repeat_count <= 0.0:
            raise ValueError("repeat_count must be > 0")
        if not isinstance(self.autoreverses, (bool, np.bool_)):
            raise ValueError("autoreverses must be a bool")
        object.__setattr__(self, "duration", duration)
        object.__setattr__(self, "repeat_count", repeat_count)
        object.__setattr__(self, "autoreverses", bool(self.autoreverses))

    @property
    def cycle_duration(self) -> float:
        """Length of one forward (and, if enabled, backward) pass."""
        return self.duration * 2.0 if self.autoreverses else self.duration

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> RepeatParams:
        """Construct repeat settings from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(
            set(params.keys()) - {"duration", "repeat_count", "autoreverses"}
        )
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        if "duration" not in params:
            raise ValueError("duration is required")
        return cls(
            duration=params["duration"],  # type: ignore[arg-type]
            repeat_count=params.get("repeat_count", 1.0),  # type: ignore[arg-type]
            autoreverses=params.get("autoreverses", False),  # type: ignore[arg-type]
        )

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "duration": self.duration,
            "repeat_count": self.repeat_count,
            "autoreverses": self.autoreverses,
        }


def active_duration(repeat: RepeatParams) -> float:
    """Return the total active duration, inf for endless repetition."""
    return repeat.cycle_duration * repeat.repeat_count


def active_to_basic(
    active_time: float | NDArray[np.float64], repeat: RepeatParams
) -> float | NDArray[np.float64]:
    """Fold active local time into basic local time within one iteration.

    Times before zero hold the start state and times past the active
    duration hold the end state. Within an autoreversing cycle the second
    half mirrors the first.
    """
    t: NDArray[np.float64] = _clamp_active(active_time, repeat)
    cycle: float = repeat.cycle_duration
    position: NDArray[np.float64] = np.mod(t, cycle)

    # A whole number of cycles ends on the last frame, not the first
    position = np.where(_at_cycle_end(t, position, repeat), cycle, position)

    if repeat.autoreverses:
        position = np.where(
            position > repeat.duration, cycle - position, position
        )

    return scalar_or_array(position)


def iteration_index(
    active_time: float | NDArray[np.float64], repeat: RepeatParams
) -> int | NDArray[np.int64]:
    """Return the zero-based iteration containing active_time.

    Raises:
        ValueError: if the iteration count does not fit in an int64, which
            can only happen with endless repetition
    """
    t: NDArray[np.float64] = _clamp_active(active_time, repeat)
    position: NDArray[np.float64] = np.mod(t, repeat.cycle_duration)
    cycles: NDArray[np.float64] = np.floor(t / repeat.cycle_duration)
    if np.any(cycles >= _MAX_ITERATION):
        raise ValueError("active_time exceeds the representable iteration range")
    index: NDArray[np.int64] = cycles.astype(np.int64)
    index = np.where(_at_cycle_end(t, position, repeat), index - 1, index)
    index = np.maximum(index, 0)
    if np.ndim(index) == 0:
        return int(index)
    return index


def _clamp_active(
    active_time: float | NDArray[np.float64], repeat: RepeatParams
) -> NDArray[np.float64]:
    t: NDArray[np.float64] = as_time_array(active_time, "active_time")
    return np.clip(t, 0.0, active_duration(repeat))


def _at_cycle_end(
    t: NDArray[np.float64], position: NDArray[np.float64], repeat: RepeatParams
) -> NDArray[np.bool_]:
    end: float = active_duration(repeat)
    return (t >= end) & (position == 0.0) & (t > 0.0)
