# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-body Keplerian propagation and trajectory sampling.

Turns OrbitalElements into Earth-radius-normalized positions for a
renderer: one position for "where is it now", or a polyline of samples
across a fraction of a day.

The current instant is always an explicit `at` argument; the host clock
is read only when it is omitted. Output is a pure function of the
inputs, so identical calls return identical sequences.

Error model: bad elements produce non-finite coordinates rather than
exceptions, and a sampler that has nothing to return hands back a flat
two-point line at the origin. sample_trajectory_strict() layers a
DegenerateOrbitError on top for callers that prefer to fail.
"""
import math
from datetime import datetime, timedelta, timezone

import numpy as np

from sattrak.domain.coordinate_frames import as_utc
from sattrak.domain.orbital_mechanics import (
    OrbitalConstants,
    RotationModel,
    elements_to_position_km,
    mean_motion_rad_s,
    semi_major_axis_km,
)
from sattrak.domain.tle import OrbitalElements, parse_tle


StatePosition = tuple[float, float, float]
Trajectory = list[StatePosition]

ORIGIN: StatePosition = (0.0, 0.0, 0.0)
DEFAULT_NUM_POINTS = 100
DEFAULT_ORBIT_FRACTION = 1.0


class DegenerateOrbitError(ValueError):
    """Raised by the strict API when no sample has finite coordinates."""


def degenerate_trajectory() -> Trajectory:
    """Flat two-point line at the origin, returned instead of an empty trajectory."""
    return [ORIGIN, ORIGIN]


def validate_sampling(num_points: int, orbit_fraction: float) -> None:
    """
    Check sampler arguments.

    Raises:
        ValueError: If num_points is negative or orbit_fraction is not
            in (0, 1].
    """
    if num_points < 0:
        raise ValueError(f"num_points must be >= 0, got {num_points}")
    if not 0.0 < orbit_fraction <= 1.0:
        raise ValueError(f"orbit_fraction must be in (0, 1], got {orbit_fraction}")


def sample_offsets_s(num_points: int, orbit_fraction: float) -> np.ndarray:
    """Seconds after the start instant for each sample: (k / N) · fraction · 86400."""
    span_s = orbit_fraction * OrbitalConstants.SECONDS_PER_DAY
    return np.arange(num_points) / num_points * span_s


def sample_times(
    start: datetime,
    num_points: int,
    orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
) -> list[datetime]:
    """UTC instants of each sample, evenly spaced from `start`."""
    start = as_utc(start)
    return [
        start + timedelta(seconds=float(offset))
        for offset in sample_offsets_s(num_points, orbit_fraction)
    ]


def normalize_km(position_km) -> StatePosition:
    """Scale a km position to Earth radii."""
    r_e = OrbitalConstants.R_EARTH_KM
    return (
        float(position_km[0]) / r_e,
        float(position_km[1]) / r_e,
        float(position_km[2]) / r_e,
    )


def is_finite_position(position: StatePosition) -> bool:
    return all(math.isfinite(c) for c in position)


def _resolve_time(at: datetime | None) -> datetime:
    return as_utc(at) if at is not None else datetime.now(timezone.utc)


def _epoch_offset_s(elements: OrbitalElements, at: datetime) -> float:
    """Seconds from the element epoch to `at`; 0 when the epoch is unknown."""
    if elements.epoch is None:
        return 0.0
    return (at - elements.epoch).total_seconds()


def _positions_at_offsets(
    elements: OrbitalElements,
    offsets_s,
    rotation: RotationModel,
):
    """Inertial km positions at `offsets_s` seconds after the element epoch."""
    n = mean_motion_rad_s(elements.mean_motion_rev_per_day)
    mean_anomaly = np.radians(elements.mean_anomaly_deg) + n * np.asarray(offsets_s, dtype=float)
    return elements_to_position_km(
        semi_major_axis_km(elements.mean_motion_rev_per_day),
        elements.eccentricity,
        elements.inclination_deg,
        elements.raan_deg,
        elements.arg_perigee_deg,
        mean_anomaly,
        rotation,
    )


def current_position(
    elements: OrbitalElements,
    at: datetime | None = None,
    rotation: RotationModel = RotationModel.FULL,
) -> StatePosition:
    """
    Normalized position of the satellite at one instant.

    Args:
        elements: Parsed orbital elements.
        at: UTC instant (default: now).
        rotation: Perifocal → inertial z-row model.

    Returns:
        (x, y, z) in Earth radii; non-finite if the elements are bad.
    """
    at = _resolve_time(at)
    x, y, z = _positions_at_offsets(elements, [_epoch_offset_s(elements, at)], rotation)
    return normalize_km((x[0], y[0], z[0]))


def sample_trajectory(
    elements: OrbitalElements,
    num_points: int = DEFAULT_NUM_POINTS,
    orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
    at: datetime | None = None,
    rotation: RotationModel = RotationModel.FULL,
) -> Trajectory:
    """
    Sample the orbit at evenly spaced instants across a fraction of a day.

    Sample k is taken at at + (k / num_points) · orbit_fraction · 86400 s.
    Every sample is kept, including non-finite ones, so the result has
    exactly num_points entries. num_points = 0 yields the degenerate
    two-point line.

    Args:
        elements: Parsed orbital elements.
        num_points: Number of samples (>= 0).
        orbit_fraction: Fraction of one day to span, in (0, 1].
        at: Start instant (default: now).
        rotation: Perifocal → inertial z-row model.

    Returns:
        List of (x, y, z) in Earth radii.

    Raises:
        ValueError: If num_points or orbit_fraction is out of range.
    """
    validate_sampling(num_points, orbit_fraction)
    if num_points == 0:
        return degenerate_trajectory()

    at = _resolve_time(at)
    offsets = _epoch_offset_s(elements, at) + sample_offsets_s(num_points, orbit_fraction)
    x, y, z = _positions_at_offsets(elements, offsets, rotation)

    r_e = OrbitalConstants.R_EARTH_KM
    return list(zip((x / r_e).tolist(), (y / r_e).tolist(), (z / r_e).tolist()))


def sample_trajectory_strict(
    elements: OrbitalElements,
    num_points: int = DEFAULT_NUM_POINTS,
    orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
    at: datetime | None = None,
    rotation: RotationModel = RotationModel.FULL,
) -> Trajectory:
    """
    Like sample_trajectory, but refuse to return a degenerate result.

    Raises:
        DegenerateOrbitError: If num_points is 0 or no sample is finite.
        ValueError: If num_points or orbit_fraction is out of range.
    """
    validate_sampling(num_points, orbit_fraction)
    if num_points == 0:
        raise DegenerateOrbitError("No samples requested")
    points = sample_trajectory(elements, num_points, orbit_fraction, at, rotation)
    if not any(is_finite_position(p) for p in points):
        raise DegenerateOrbitError(
            f"All {num_points} samples are non-finite for elements {elements}"
        )
    return points


class KeplerPropagator:
    """
    Two-body propagator working directly from TLE line pairs.

    Satisfies the TrajectoryPropagator port. Holds only the rotation
    model, so one instance can be shared across threads.
    """

    def __init__(self, rotation: RotationModel = RotationModel.FULL):
        self._rotation = rotation

    @property
    def rotation(self) -> RotationModel:
        return self._rotation

    def position(
        self,
        line1: str,
        line2: str,
        at: datetime | None = None,
    ) -> StatePosition:
        return current_position(parse_tle(line1, line2), at, self._rotation)

    def trajectory(
        self,
        line1: str,
        line2: str,
        num_points: int = DEFAULT_NUM_POINTS,
        orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
        at: datetime | None = None,
    ) -> Trajectory:
        return sample_trajectory(
            parse_tle(line1, line2), num_points, orbit_fraction, at, self._rotation,
        )
