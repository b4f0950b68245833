# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Two-body Keplerian geometry used to turn TLE mean elements into
positions: Kepler's equation, semi-major axis from mean motion, true
anomaly, orbital radius, perifocal coordinates and the 3-1-3 rotation
into the inertial frame.

Every function accepts Python floats or numpy arrays. Non-physical
inputs are not rejected: they produce inf/nan which callers treat as
"cannot propagate".
"""
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class _OrbitalConstants:
    """Constants for the simplified two-body model (kilometre units)."""
    MU_EARTH_KM3_S2: float = 398600.4418   # km³/s², gravitational parameter
    R_EARTH_KM: float = 6371.0             # km, mean radius and renderer unit
    SECONDS_PER_DAY: float = 86400.0
    KEPLER_ITERATIONS: int = 10


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


class RotationModel(Enum):
    """Z-row of the perifocal → inertial rotation.

    FULL is the standard 3-1-3 matrix. FLATTENED reproduces the legacy
    renderer output, whose z-row lacks the sin(i) factor and carries
    sin(Ω) instead; inclined orbits come out with flattened z-excursions.
    """
    FULL = "full"
    FLATTENED = "flattened"


def mean_motion_rad_s(mean_motion_rev_per_day):
    """Convert mean motion from revolutions/day to rad/s."""
    return mean_motion_rev_per_day * 2.0 * np.pi / OrbitalConstants.SECONDS_PER_DAY


def semi_major_axis_km(mean_motion_rev_per_day):
    """
    Semi-major axis from mean motion via Kepler's third law.

        a = (μ / n²)^(1/3)

    n = 0 gives inf. A negative mean motion has no real orbit and gives
    nan, as does a nan input.

    Args:
        mean_motion_rev_per_day: Mean motion (rev/day).

    Returns:
        Semi-major axis in km.
    """
    n = np.float64(mean_motion_rad_s(mean_motion_rev_per_day))
    if n < 0:
        return math.nan
    with np.errstate(divide='ignore', over='ignore'):
        a = (OrbitalConstants.MU_EARTH_KM3_S2 / n**2) ** (1.0 / 3.0)
    return float(a)


def solve_kepler(mean_anomaly_rad, eccentricity):
    """
    Eccentric anomaly from Kepler's equation E = M + e·sin(E).

    Fixed-point iteration seeded at E₀ = M, exactly
    OrbitalConstants.KEPLER_ITERATIONS steps with no convergence test.
    The iteration count is part of the output contract: results must
    match the reference renderer bit-for-bit.

    Args:
        mean_anomaly_rad: Mean anomaly M (radians), scalar or array.
        eccentricity: Eccentricity e.

    Returns:
        Eccentric anomaly E (radians), same shape as M.
    """
    ecc_anomaly = mean_anomaly_rad
    with np.errstate(invalid='ignore'):
        for _ in range(OrbitalConstants.KEPLER_ITERATIONS):
            ecc_anomaly = mean_anomaly_rad + eccentricity * np.sin(ecc_anomaly)
    return ecc_anomaly


def true_anomaly(ecc_anomaly_rad, eccentricity):
    """
    True anomaly from eccentric anomaly.

        ν = 2·atan2(√(1+e)·sin(E/2), √(1−e)·cos(E/2))
    """
    with np.errstate(invalid='ignore'):
        return 2.0 * np.arctan2(
            np.sqrt(1.0 + eccentricity) * np.sin(ecc_anomaly_rad / 2.0),
            np.sqrt(1.0 - eccentricity) * np.cos(ecc_anomaly_rad / 2.0),
        )


def orbital_radius_km(a_km, ecc_anomaly_rad, eccentricity):
    """Distance from Earth's centre: r = a·(1 − e·cos E)."""
    with np.errstate(invalid='ignore'):
        return a_km * (1.0 - eccentricity * np.cos(ecc_anomaly_rad))


def perifocal_position(radius_km, true_anomaly_rad):
    """
    Position in the perifocal (PQW) frame.

    Returns:
        (x, y, z) with x toward periapsis and z = 0.
    """
    with np.errstate(invalid='ignore'):
        x = radius_km * np.cos(true_anomaly_rad)
        y = radius_km * np.sin(true_anomaly_rad)
    return x, y, np.zeros_like(x)


def perifocal_to_inertial(
    x_p,
    y_p,
    inclination_deg: float,
    raan_deg: float,
    arg_perigee_deg: float,
    rotation: RotationModel = RotationModel.FULL,
):
    """
    Rotate perifocal coordinates into the inertial frame.

    3-1-3 Euler sequence R_z(-Ω)·R_x(-i)·R_z(-ω) applied to (xp, yp, 0):

        x = (cΩ·cω − sΩ·sω·ci)·xp + (−cΩ·sω − sΩ·cω·ci)·yp
        y = (sΩ·cω + cΩ·sω·ci)·xp + (−sΩ·sω + cΩ·cω·ci)·yp
        z = (sω·si)·xp + (cω·si)·yp            FULL
        z = (sΩ·sω)·xp + (sΩ·cω)·yp            FLATTENED

    Args:
        x_p, y_p: Perifocal coordinates (scalar or array).
        inclination_deg: Inclination (degrees).
        raan_deg: Right ascension of ascending node (degrees).
        arg_perigee_deg: Argument of perigee (degrees).
        rotation: Which z-row to apply.

    Returns:
        (x, y, z) in the same units as the input.
    """
    i = np.radians(inclination_deg)
    raan = np.radians(raan_deg)
    w = np.radians(arg_perigee_deg)

    cO, sO = np.cos(raan), np.sin(raan)
    co, so = np.cos(w), np.sin(w)
    ci, si = np.cos(i), np.sin(i)

    if rotation is RotationModel.FLATTENED:
        z_row = (sO * so, sO * co)
    else:
        z_row = (so * si, co * si)

    rotation_matrix = np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci],
        z_row,
    ])

    with np.errstate(invalid='ignore'):
        x = rotation_matrix[0, 0] * x_p + rotation_matrix[0, 1] * y_p
        y = rotation_matrix[1, 0] * x_p + rotation_matrix[1, 1] * y_p
        z = rotation_matrix[2, 0] * x_p + rotation_matrix[2, 1] * y_p
    return x, y, z


def elements_to_position_km(
    a_km: float,
    eccentricity: float,
    inclination_deg: float,
    raan_deg: float,
    arg_perigee_deg: float,
    mean_anomaly_rad,
    rotation: RotationModel = RotationModel.FULL,
):
    """
    Inertial position for one or more mean anomalies.

    Composes solve_kepler → true_anomaly/orbital_radius_km →
    perifocal_position → perifocal_to_inertial.

    Returns:
        (x, y, z) in km, scalars or arrays matching mean_anomaly_rad.
    """
    ecc_anomaly = solve_kepler(mean_anomaly_rad, eccentricity)
    nu = true_anomaly(ecc_anomaly, eccentricity)
    r = orbital_radius_km(a_km, ecc_anomaly, eccentricity)
    x_p, y_p, _ = perifocal_position(r, nu)
    return perifocal_to_inertial(
        x_p, y_p, inclination_deg, raan_deg, arg_perigee_deg, rotation,
    )
