# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 propagator adapter.

The higher-fidelity alternative to the two-body KeplerPropagator.
The sgp4 library is confined to this layer and imported lazily.

TLE mean elements are SGP4-specific; SGP4 reproduces the published
positions far better than plain Kepler motion. Output is TEME rotated
into the Earth-fixed frame by GMST (unless earth_fixed=False) and
scaled to Earth radii.

Samples SGP4 cannot propagate (decayed orbit, bad elements) are
dropped. A trajectory left with no samples becomes the flat two-point
line at the origin; a failed position query returns the origin.
"""
import logging
from datetime import datetime, timezone

import numpy as np

from sattrak.domain.coordinate_frames import as_utc, gmst_rad, inertial_to_earth_fixed
from sattrak.domain.propagation import (
    DEFAULT_NUM_POINTS,
    DEFAULT_ORBIT_FRACTION,
    ORIGIN,
    StatePosition,
    Trajectory,
    degenerate_trajectory,
    normalize_km,
    sample_times,
    validate_sampling,
)


_log = logging.getLogger(__name__)


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, WGS72, jday
    except ImportError:
        raise ImportError(
            "sgp4 is required for SGP4 propagation. "
            "Install with: pip install sattrak[live]"
        ) from None
    return Satrec, WGS72, jday


def _datetime_to_jd(jday_fn, dt: datetime) -> tuple[float, float]:
    return jday_fn(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                   dt.second + dt.microsecond / 1e6)


class Sgp4Propagator:
    """
    Propagates TLE pairs with SGP4 (WGS72 constants).

    Satisfies the TrajectoryPropagator port.

    Args:
        earth_fixed: Rotate TEME positions into the Earth-fixed frame.

    Raises:
        ImportError: If sgp4 is not installed.
    """

    def __init__(self, earth_fixed: bool = True):
        _require_sgp4()
        self._earth_fixed = earth_fixed

    def _satrec(self, line1: str, line2: str):
        Satrec, WGS72, _ = _require_sgp4()
        try:
            return Satrec.twoline2rv(line1, line2, WGS72)
        except (ValueError, IndexError) as e:
            _log.debug("Unparseable TLE %r: %s", line1, e)
            return None

    def _to_output_frame(self, position_km, when: datetime) -> StatePosition:
        pos = (float(position_km[0]), float(position_km[1]), float(position_km[2]))
        if self._earth_fixed:
            pos = inertial_to_earth_fixed(pos, gmst_rad(when))
        return normalize_km(pos)

    def position(
        self,
        line1: str,
        line2: str,
        at: datetime | None = None,
    ) -> StatePosition:
        _, _, jday = _require_sgp4()
        at = as_utc(at) if at is not None else datetime.now(timezone.utc)
        satrec = self._satrec(line1, line2)
        if satrec is None:
            return ORIGIN

        jd, fr = _datetime_to_jd(jday, at)
        error_code, position_km, _ = satrec.sgp4(jd, fr)
        if error_code != 0 or not np.all(np.isfinite(position_km)):
            _log.debug("SGP4 error %d at %s", error_code, at.isoformat())
            return ORIGIN
        return self._to_output_frame(position_km, at)

    def trajectory(
        self,
        line1: str,
        line2: str,
        num_points: int = DEFAULT_NUM_POINTS,
        orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
        at: datetime | None = None,
    ) -> Trajectory:
        validate_sampling(num_points, orbit_fraction)
        _, _, jday = _require_sgp4()
        at = as_utc(at) if at is not None else datetime.now(timezone.utc)

        satrec = self._satrec(line1, line2)
        times = sample_times(at, num_points, orbit_fraction)
        points: Trajectory = []

        if satrec is not None and times:
            jd_fr = [_datetime_to_jd(jday, t) for t in times]
            jd = np.array([p[0] for p in jd_fr])
            fr = np.array([p[1] for p in jd_fr])
            errors, positions_km, _ = satrec.sgp4_array(jd, fr)

            for when, error_code, position_km in zip(times, errors, positions_km):
                if error_code != 0 or not np.all(np.isfinite(position_km)):
                    _log.debug("SGP4 error %d at %s", error_code, when.isoformat())
                    continue
                points.append(self._to_output_frame(position_km, when))

        if not points:
            _log.warning("No orbit points generated for %r; using flat line", line1)
            return degenerate_trajectory()
        return points
