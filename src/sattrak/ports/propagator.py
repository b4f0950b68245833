# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for TLE propagators.

Implemented by the two-body KeplerPropagator in the domain and by the
SGP4 adapter.
"""
from datetime import datetime
from typing import Protocol, runtime_checkable

from sattrak.domain.propagation import StatePosition, Trajectory


@runtime_checkable
class TrajectoryPropagator(Protocol):
    """Port for turning a TLE pair into renderer-ready positions."""

    def position(
        self,
        line1: str,
        line2: str,
        at: datetime | None = None,
    ) -> StatePosition:
        """Position at one instant, in Earth radii."""
        ...

    def trajectory(
        self,
        line1: str,
        line2: str,
        num_points: int = 100,
        orbit_fraction: float = 1.0,
        at: datetime | None = None,
    ) -> Trajectory:
        """
        Positions sampled across orbit_fraction of a day starting at `at`.

        Never empty: a propagation with no usable samples returns the
        two-point line at the origin.
        """
        ...
