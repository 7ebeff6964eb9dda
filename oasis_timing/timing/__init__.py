################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Hierarchical media timing."""

from __future__ import annotations

from oasis_timing.timing.basic_time import RepeatParams
from oasis_timing.timing.basic_time import active_duration
from oasis_timing.timing.basic_time import active_to_basic
from oasis_timing.timing.basic_time import iteration_index
from oasis_timing.timing.media_timing import ZeroSpeedError
from oasis_timing.timing.media_timing import change_speed
from oasis_timing.timing.media_timing import local_to_parent
from oasis_timing.timing.media_timing import parent_to_local
from oasis_timing.timing.media_timing import pause
from oasis_timing.timing.media_timing import resume
from oasis_timing.timing.media_timing import solve_begin_time
from oasis_timing.timing.timespace import Timespace


__all__ = [
    "RepeatParams",
    "Timespace",
    "ZeroSpeedError",
    "active_duration",
    "active_to_basic",
    "change_speed",
    "iteration_index",
    "local_to_parent",
    "parent_to_local",
    "pause",
    "resume",
    "solve_begin_time",
]
