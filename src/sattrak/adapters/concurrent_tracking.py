# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Concurrent tracking: propagates many catalog entries in parallel.

Uses ThreadPoolExecutor from stdlib. Each propagation reads only its own
inputs, so entries can be computed independently; results come back in
input order.
"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from sattrak.domain.catalog import SatelliteCatalogEntry
from sattrak.domain.coordinate_frames import as_utc
from sattrak.domain.propagation import DEFAULT_NUM_POINTS, DEFAULT_ORBIT_FRACTION
from sattrak.ports.export import TrackedSatellite
from sattrak.ports.propagator import TrajectoryPropagator


_log = logging.getLogger(__name__)


class ConcurrentTracker:
    """
    Computes position and trajectory for a batch of catalog entries.

    Args:
        propagator: Any TrajectoryPropagator (Kepler, SGP4, cached).
        max_workers: Thread pool size.
            Default: min(32, os.cpu_count() + 4), the executor default.
    """

    def __init__(
        self,
        propagator: TrajectoryPropagator,
        max_workers: int | None = None,
    ):
        self._propagator = propagator
        self._max_workers = max_workers or min(32, (os.cpu_count() or 1) + 4)

    def track(
        self,
        entry: SatelliteCatalogEntry,
        num_points: int = DEFAULT_NUM_POINTS,
        orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
        at: datetime | None = None,
    ) -> TrackedSatellite:
        """Position and trajectory of a single entry at one shared instant."""
        at = as_utc(at) if at is not None else datetime.now(timezone.utc)
        return TrackedSatellite(
            entry=entry,
            position=self._propagator.position(entry.line1, entry.line2, at),
            trajectory=self._propagator.trajectory(
                entry.line1, entry.line2, num_points, orbit_fraction, at,
            ),
        )

    def track_all(
        self,
        entries: list[SatelliteCatalogEntry],
        num_points: int = DEFAULT_NUM_POINTS,
        orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
        at: datetime | None = None,
    ) -> list[TrackedSatellite]:
        """
        Track all entries concurrently.

        Entries whose propagation raises (any Exception) are logged
        and left out; the rest of the batch is still returned.

        Returns:
            TrackedSatellite list in the order of `entries`.
        """
        at = as_utc(at) if at is not None else datetime.now(timezone.utc)
        tracked: list[TrackedSatellite] = []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [
                (entry, executor.submit(self.track, entry, num_points, orbit_fraction, at))
                for entry in entries
            ]
            for entry, future in futures:
                try:
                    tracked.append(future.result())
                except Exception as e:
                    _log.warning("Skipping %s: %s: %s", entry.name, type(e).__name__, e)
                    continue

        return tracked
