################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Conversion between parent and local timespaces.

A nested timespace is related to its parent by a single linear equation:

    local_time = (parent_time - begin_time) * speed + time_offset

begin_time is expressed in the parent timespace and is scaled by speed,
while time_offset is expressed in local time and is applied unscaled. The
derived procedures below (pause, resume, change_speed) rewrite the
parameters at a chosen parent time so that local time stays continuous.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from oasis_timing.config.timing_params import TimingParams
from oasis_timing.math_utils.validation import as_finite_float
from oasis_timing.math_utils.validation import as_time_array
from oasis_timing.math_utils.validation import finite_result


class ZeroSpeedError(ValueError):
    """Raised when an operation must divide by a zero speed."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} is undefined when speed is zero")
        self.operation: str = operation


def parent_to_local(
    parent_time: float | NDArray[np.float64], params: TimingParams
) -> float | NDArray[np.float64]:
    """Convert parent time(s) into the local timespace.

    With a zero speed every parent time maps to time_offset.

    Raises:
        ValueError: if a result overflows the float range
    """
    parent: NDArray[np.float64] = as_time_array(parent_time, "parent_time")
    with np.errstate(over="ignore", invalid="ignore"):
        local: NDArray[np.float64] = (
            parent - params.begin_time
        ) * params.speed + params.time_offset
    return finite_result(local, "local_time")


def local_to_parent(
    local_time: float | NDArray[np.float64], params: TimingParams
) -> float | NDArray[np.float64]:
    """Convert local time(s) back into the parent timespace.

    Raises:
        ZeroSpeedError: if the timespace is paused, since every parent time
            maps to the same local time
        ValueError: if a result overflows the float range, as happens for
            large local times at tiny speeds
    """
    if params.speed == 0.0:
        raise ZeroSpeedError("local_to_parent")
    local: NDArray[np.float64] = as_time_array(local_time, "local_time")
    with np.errstate(over="ignore", invalid="ignore"):
        parent: NDArray[np.float64] = (
            params.begin_time + (local - params.time_offset) / params.speed
        )
    return finite_result(parent, "parent_time")


def solve_begin_time(
    parent_time: float, local_time: float, time_offset: float, speed: float
) -> float:
    """Return the begin time that maps parent_time onto local_time.

    Raises:
        ZeroSpeedError: if speed is zero
        ValueError: if the solved begin time overflows the float range
    """
    parent: float = as_finite_float(parent_time, "parent_time")
    local: float = as_finite_float(local_time, "local_time")
    offset: float = as_finite_float(time_offset, "time_offset")
    rate: float = as_finite_float(speed, "speed")
    if rate == 0.0:
        raise ZeroSpeedError("solve_begin_time")
    begin_time: float = parent - (local - offset) / rate
    if not math.isfinite(begin_time):
        raise ValueError("begin_time is not representable as a finite float")
    return begin_time


def pause(params: TimingParams, parent_time: float) -> TimingParams:
    """Freeze local time at its value for parent_time."""
    current_local: float = float(parent_to_local(parent_time, params))
    return params.replace(speed=0.0, time_offset=current_local)


def resume(
    params: TimingParams, parent_time: float, speed: float = 1.0
) -> TimingParams:
    """Restart a paused timespace at parent_time without a discontinuity.

    The paused local time is read from time_offset, all offsets are cleared
    and begin_time is solved so the forward conversion at parent_time yields
    the paused local time again.

    Raises:
        ValueError: if the timespace is not paused
        ZeroSpeedError: if the resume speed is zero
    """
    if not params.is_paused:
        raise ValueError("resume requires a paused timespace (speed == 0)")
    rate: float = as_finite_float(speed, "speed")
    if rate == 0.0:
        raise ZeroSpeedError("resume")

    paused_local: float = params.time_offset
    cleared: TimingParams = TimingParams(begin_time=0.0, time_offset=0.0, speed=rate)

    # Scaled parent time with no nested offsets applied
    scaled_parent: float = float(parent_to_local(parent_time, cleared))
    time_since_pause_scaled: float = scaled_parent - paused_local

    return cleared.replace(begin_time=time_since_pause_scaled / rate)


def change_speed(
    params: TimingParams, parent_time: float, new_speed: float
) -> TimingParams:
    """Change the rate of a timespace while keeping local time continuous.

    Applies t_b' = t_p - (t_p - t_b) * (m / n) where m is the current speed
    and n is the new one.

    Raises:
        ZeroSpeedError: if new_speed is zero; use pause() instead
        ValueError: if the new begin time overflows the float range
    """
    n: float = as_finite_float(new_speed, "new_speed")
    if n == 0.0:
        raise ZeroSpeedError("change_speed")
    t_p: float = as_finite_float(parent_time, "parent_time")
    m: float = params.speed
    t_b: float = params.begin_time
    return params.replace(begin_time=t_p - (t_p - t_b) * (m / n), speed=n)
