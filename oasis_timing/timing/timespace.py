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

import logging
from typing import Optional

from oasis_timing.config.timing_params import TimingParams
from oasis_timing.timing.media_timing import change_speed
from oasis_timing.timing.media_timing import local_to_parent
from oasis_timing.timing.media_timing import parent_to_local
from oasis_timing.timing.media_timing import pause
from oasis_timing.timing.media_timing import resume


_LOG: logging.Logger = logging.getLogger(__name__)


class Timespace:
    """Node in a hierarchy of nested timespaces.

    Responsibility:
        Relate a local timespace to its parent and, transitively, to the host
        media time at the root of the hierarchy.

    Inputs/outputs:
        - Inputs: host media times supplied by the caller at arbitrary
          moments. The hierarchy owns no clock.
        - Outputs: local times for any node, conversions between nodes.

    Determinism and edge cases:
        - A root node's parent timespace is the host media time.
        - Paused nodes map every parent time onto one local time, so they
          cannot be inverted. Conversions that must climb through a paused
          node raise ZeroSpeedError.
        - Assigning a parent that would create a cycle raises ValueError.
    """

    def __init__(
        self,
        params: Optional[TimingParams] = None,
        parent: Optional[Timespace] = None,
        name: str = "",
    ) -> None:
        self.params: TimingParams = params if params is not None else TimingParams()
        self.name: str = name
        self._parent: Optional[Timespace] = None
        self.parent = parent

    def __repr__(self) -> str:
        return f"Timespace(name={self.name!r}, params={self.params!r})"

    @property
    def parent(self) -> Optional[Timespace]:
        return self._parent

    @parent.setter
    def parent(self, parent: Optional[Timespace]) -> None:
        node: Optional[Timespace] = parent
        while node is not None:
            if node is self:
                raise ValueError("timespace hierarchy must not contain cycles")
            node = node._parent
        self._parent = parent

    @property
    def is_paused(self) -> bool:
        return self.params.is_paused

    def ancestors(self) -> list[Timespace]:
        """Return this node followed by its ancestors up to the root."""
        chain: list[Timespace] = []
        node: Optional[Timespace] = self
        while node is not None:
            chain.append(node)
            node = node._parent
        return chain

    def root(self) -> Timespace:
        return self.ancestors()[-1]

    def parent_time(self, media_time: float) -> float:
        """Return the time in this node's parent timespace."""
        if self._parent is None:
            return float(media_time)
        return self._parent.local_time(media_time)

    def local_time(self, media_time: float) -> float:
        """Return this node's local time for a host media time."""
        t: float = float(media_time)
        for node in reversed(self.ancestors()):
            t = float(parent_to_local(t, node.params))
        return t

    def convert_time(self, t: float, from_space: Optional[Timespace] = None) -> float:
        """Convert a time from another timespace into this one.

        Args:
            t: Time expressed in from_space, or host media time if None
            from_space: Source node; must share this node's root

        Raises:
            ValueError: if the nodes belong to different hierarchies
            ZeroSpeedError: if a paused node lies between from_space and the
                common ancestor
        """
        own_chain: list[Timespace] = self.ancestors()
        if from_space is None:
            source_chain: list[Timespace] = []
        else:
            source_chain = from_space.ancestors()
            if source_chain[-1] is not own_chain[-1]:
                raise ValueError("timespaces do not share a root")

        common: Optional[Timespace] = None
        for node in source_chain:
            if any(node is own for own in own_chain):
                common = node
                break

        result: float = float(t)
        for node in source_chain:
            if node is common:
                break
            result = float(local_to_parent(result, node.params))

        descent: list[Timespace] = []
        for node in own_chain:
            if node is common:
                break
            descent.append(node)
        for node in reversed(descent):
            result = float(parent_to_local(result, node.params))

        return result

    def pause(self, media_time: float) -> None:
        """Freeze this node's local time at its value for media_time."""
        parent_time: float = self.parent_time(media_time)
        self.params = pause(self.params, parent_time)
        _LOG.debug(
            "Paused timespace %r at parent time %f, local time %f",
            self.name,
            parent_time,
            self.params.time_offset,
        )

    def resume(self, media_time: float, speed: float = 1.0) -> None:
        """Resume a paused node from its frozen local time."""
        parent_time: float = self.parent_time(media_time)
        paused_local: float = self.params.time_offset
        self.params = resume(self.params, parent_time, speed)
        _LOG.debug(
            "Resumed timespace %r at parent time %f from local time %f, speed %f",
            self.name,
            parent_time,
            paused_local,
            self.params.speed,
        )

    def set_speed(self, media_time: float, speed: float) -> None:
        """Change this node's speed without a jump in local time."""
        parent_time: float = self.parent_time(media_time)
        old_speed: float = self.params.speed
        self.params = change_speed(self.params, parent_time, speed)
        _LOG.debug(
            "Changed timespace %r speed from %f to %f at parent time %f",
            self.name,
            old_speed,
            self.params.speed,
            parent_time,
        )
