################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for timing parameter configuration."""

from __future__ import annotations

import math

import numpy as np
import pytest

from oasis_timing.config.timing_params import TimingParams


def test_defaults_are_identity() -> None:
    """Checks default parameters map parent time unchanged."""
    params: TimingParams = TimingParams.defaults()
    params.validate()
    assert params == TimingParams(begin_time=0.0, time_offset=0.0, speed=1.0)
    assert not params.is_paused


def test_from_dict_fills_defaults() -> None:
    """Checks missing keys fall back to defaults."""
    params: TimingParams = TimingParams.from_dict({"speed": 2, "begin_time": 1.5})
    assert params.speed == 2.0
    assert isinstance(params.speed, float)
    assert params.begin_time == 1.5
    assert params.time_offset == 0.0


def test_from_dict_rejects_unknown_keys() -> None:
    """Ensures unknown parameters are reported."""
    with pytest.raises(ValueError, match="unknown parameter: duration"):
        TimingParams.from_dict({"duration": 1.0})


def test_from_dict_rejects_non_mapping() -> None:
    """Ensures non-mapping input is rejected."""
    with pytest.raises(ValueError, match="params must be a mapping"):
        TimingParams.from_dict([("speed", 1.0)])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("speed", True, "speed must be a float"),
        ("speed", "fast", "speed must be a float"),
        ("begin_time", math.nan, "begin_time must be finite"),
        ("time_offset", math.inf, "time_offset must be finite"),
    ],
)
def test_invalid_values_rejected(field: str, value: object, message: str) -> None:
    """Ensures non-finite and non-numeric values are rejected."""
    with pytest.raises(ValueError, match=message):
        TimingParams.from_dict({field: value})
    with pytest.raises(ValueError, match=message):
        TimingParams(**{field: value})  # type: ignore[arg-type]


def test_as_dict_round_trip() -> None:
    """Checks as_dict output reconstructs the same parameters."""
    params: TimingParams = TimingParams(begin_time=-2.0, time_offset=0.5, speed=-1.0)
    assert TimingParams.from_dict(params.as_dict()) == params


def test_replace_returns_new_instance() -> None:
    """Ensures replace leaves the original untouched."""
    params: TimingParams = TimingParams(speed=2.0)
    paused: TimingParams = params.replace(speed=0.0)
    assert params.speed == 2.0
    assert paused.is_paused


def test_numpy_scalars_accepted() -> None:
    """Checks numpy integer and float scalars coerce to Python floats."""
    params: TimingParams = TimingParams.from_dict(
        {"begin_time": np.int64(2), "speed": np.float32(0.5)}
    )
    assert params.begin_time == 2.0
    assert isinstance(params.begin_time, float)
    assert params.speed == 0.5
    with pytest.raises(ValueError, match="speed must be a float"):
        TimingParams(speed=np.bool_(True))  # type: ignore[arg-type]
