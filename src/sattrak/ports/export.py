# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for trajectory export.

Adapters write tracked satellites to files a renderer can load
(JSON, CSV).
"""
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sattrak.domain.catalog import SatelliteCatalogEntry
from sattrak.domain.propagation import StatePosition, Trajectory


@dataclass(frozen=True)
class TrackedSatellite:
    """A catalog entry with its computed position and orbit polyline."""
    entry: SatelliteCatalogEntry
    position: StatePosition
    trajectory: Trajectory


@runtime_checkable
class TrajectoryExporter(Protocol):
    """Port for exporting tracked satellites to file."""

    def export(self, tracked: list[TrackedSatellite], path: str) -> int:
        """
        Write tracked satellites to `path`.

        Returns:
            Number of satellites exported.
        """
        ...
