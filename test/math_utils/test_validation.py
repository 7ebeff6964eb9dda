################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for validation helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_timing.math_utils.validation import as_finite_float
from oasis_timing.math_utils.validation import as_float
from oasis_timing.math_utils.validation import as_time_array
from oasis_timing.math_utils.validation import assert_finite
from oasis_timing.math_utils.validation import finite_result
from oasis_timing.math_utils.validation import scalar_or_array


def test_as_finite_float_accepts_numbers() -> None:
    """Checks ints and numpy floats coerce to float."""
    assert as_finite_float(3, "x") == 3.0
    assert isinstance(as_finite_float(np.float64(2.5), "x"), float)


def test_as_finite_float_rejects_invalid() -> None:
    """Ensures bools, strings and non-finite values are rejected."""
    with pytest.raises(ValueError, match="x must be a float"):
        as_finite_float(False, "x")
    with pytest.raises(ValueError, match="x must be a float"):
        as_finite_float("1.0", "x")
    with pytest.raises(ValueError, match="x must be finite"):
        as_finite_float(-math.inf, "x")


def test_assert_finite() -> None:
    """Ensures assert_finite rejects non-finite inputs."""
    good: NDArray[np.float64] = np.array([1.0, 2.0, 3.0], dtype=float)
    assert_finite(good, "good")
    bad: NDArray[np.float64] = np.array([1.0, np.nan, 3.0], dtype=float)
    with pytest.raises(ValueError, match="bad must be finite"):
        assert_finite(bad, "bad")


def test_as_time_array_rejects_bool() -> None:
    """Ensures booleans are not treated as times."""
    with pytest.raises(ValueError, match="t must be a float"):
        as_time_array(True, "t")  # type: ignore[arg-type]


def test_scalar_or_array() -> None:
    """Checks 0-d results collapse to floats."""
    assert isinstance(scalar_or_array(np.asarray(1.0)), float)
    values: NDArray[np.float64] = np.array([1.0, 2.0])
    assert scalar_or_array(values) is values


def test_as_float_accepts_numpy_integers() -> None:
    """Checks numpy integer scalars are real numbers."""
    assert as_float(np.int64(2), "x") == 2.0
    assert as_finite_float(np.uint8(3), "x") == 3.0
    assert math.isinf(as_float(math.inf, "x"))
    with pytest.raises(ValueError, match="x must be a float"):
        as_float(np.bool_(False), "x")


def test_finite_result() -> None:
    """Ensures overflowed results are reported by name."""
    assert finite_result(np.asarray(2.0), "t") == 2.0
    with pytest.raises(ValueError, match="t is not representable"):
        finite_result(np.array([1.0, np.inf]), "t")
