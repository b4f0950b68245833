# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions for the SGP4 path.

SGP4 reports positions in TEME (true equator, mean equinox), an
inertial frame. The renderer draws an Earth-fixed globe, so positions
are rotated about Z by the Greenwich Mean Sidereal Time angle. Polar
motion and the equation of the equinoxes are ignored; at renderer
scale they are invisible.
"""
import math
from datetime import datetime, timezone


_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def gmst_rad(epoch: datetime) -> float:
    """
    Greenwich Mean Sidereal Time for a UTC epoch.

    IAU formula in Julian centuries from J2000.0:
        GMST(°) = 280.46061837 + 360.98564736629 · (JD − 2451545.0)
                  + 0.000387933 · T² − T³ / 38710000

    Returns:
        GMST in radians, normalized to [0, 2π).
    """
    jd_since_j2000 = (as_utc(epoch) - _J2000).total_seconds() / 86400.0
    t_centuries = jd_since_j2000 / 36525.0

    gmst_deg = (
        280.46061837
        + 360.98564736629 * jd_since_j2000
        + 0.000387933 * t_centuries**2
        - t_centuries**3 / 38710000.0
    ) % 360.0

    return math.radians(gmst_deg)


def inertial_to_earth_fixed(
    pos_inertial: tuple[float, float, float],
    gmst_angle_rad: float,
) -> tuple[float, float, float]:
    """
    Rotate an inertial position into the Earth-fixed frame.

        [x_ef]   [ cos θ   sin θ  0] [x]
        [y_ef] = [−sin θ   cos θ  0] [y]
        [z_ef]   [   0       0    1] [z]
    """
    cos_t = math.cos(gmst_angle_rad)
    sin_t = math.sin(gmst_angle_rad)
    x, y, z = pos_inertial
    return (
        cos_t * x + sin_t * y,
        -sin_t * x + cos_t * y,
        z,
    )
