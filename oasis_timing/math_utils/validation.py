################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validation helpers for timing inputs."""

from __future__ import annotations

import math
import numbers

import numpy as np
from numpy.typing import NDArray


def as_float(value: object, name: str) -> float:
    """Return a real number as a float, rejecting bools and non-numbers.

    Python and numpy integer and floating scalars are accepted. Infinity and
    NaN pass through unchanged.
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a float")
    return float(value)


def as_finite_float(value: object, name: str) -> float:
    """Return the value as a finite float, rejecting bools and non-numbers."""
    result: float = as_float(value, name)
    if not math.isfinite(result):
        raise ValueError(f"{name} must be finite")
    return result


def finite_result(
    result: NDArray[np.float64], name: str
) -> float | NDArray[np.float64]:
    """Return a computed result, raising ValueError if it overflowed."""
    if not np.all(np.isfinite(result)):
        raise ValueError(f"{name} is not representable as a finite float")
    return scalar_or_array(result)


def as_time_array(
    values: float | NDArray[np.float64], name: str
) -> NDArray[np.float64]:
    """Return a finite float64 array view of scalar or array time values."""
    if isinstance(values, bool):
        raise ValueError(f"{name} must be a float")
    array: NDArray[np.float64] = np.asarray(values, dtype=np.float64)
    assert_finite(array, name)
    return array


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")


def scalar_or_array(result: NDArray[np.float64]) -> float | NDArray[np.float64]:
    """Return a Python float for 0-d results and the array otherwise."""
    if np.ndim(result) == 0:
        return float(result)
    return result
