# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Memoizing wrapper around any TrajectoryPropagator.

Trajectories are pure functions of (TLE pair, sample count, span,
start instant), so repeated requests from a render loop can be served
from an LRU cache. With `resolution_s` set, the start instant is
floored to that many seconds so requests within the same window share
one entry.
"""
import functools
from datetime import datetime, timezone

from sattrak.domain.coordinate_frames import as_utc
from sattrak.domain.propagation import (
    DEFAULT_NUM_POINTS,
    DEFAULT_ORBIT_FRACTION,
    StatePosition,
    Trajectory,
)
from sattrak.ports.propagator import TrajectoryPropagator


class TrajectoryCache(TrajectoryPropagator):
    """
    LRU-cached trajectories on top of another propagator.

    Args:
        propagator: The propagator doing the work.
        maxsize: Maximum number of cached trajectories.
        resolution_s: Floor `at` to this many seconds before lookup
            (None keeps the exact instant).
    """

    def __init__(
        self,
        propagator: TrajectoryPropagator,
        maxsize: int = 128,
        resolution_s: float | None = None,
    ):
        if resolution_s is not None and resolution_s <= 0:
            raise ValueError(f"resolution_s must be positive, got {resolution_s}")
        self._propagator = propagator
        self._resolution_s = resolution_s
        self._cached = functools.lru_cache(maxsize=maxsize)(self._compute)

    def _compute(
        self,
        line1: str,
        line2: str,
        num_points: int,
        orbit_fraction: float,
        at: datetime,
    ) -> tuple[StatePosition, ...]:
        return tuple(
            self._propagator.trajectory(line1, line2, num_points, orbit_fraction, at)
        )

    def _key_time(self, at: datetime | None) -> datetime:
        at = as_utc(at) if at is not None else datetime.now(timezone.utc)
        if self._resolution_s is None:
            return at
        ts = at.timestamp()
        return datetime.fromtimestamp(ts - ts % self._resolution_s, tz=timezone.utc)

    def position(
        self,
        line1: str,
        line2: str,
        at: datetime | None = None,
    ) -> StatePosition:
        return self._propagator.position(line1, line2, at)

    def trajectory(
        self,
        line1: str,
        line2: str,
        num_points: int = DEFAULT_NUM_POINTS,
        orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
        at: datetime | None = None,
    ) -> Trajectory:
        points = self._cached(line1, line2, num_points, orbit_fraction, self._key_time(at))
        return list(points)

    def cache_info(self):
        return self._cached.cache_info()

    def clear(self) -> None:
        self._cached.cache_clear()
