# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SatTrak

Compute satellite orbits from Two-Line Element sets for a 3D globe
renderer. Includes a permissive TLE parser, two-body Keplerian
propagation with a fixed-iteration Kepler solver, trajectory sampling
normalized to Earth radii, an optional SGP4 path, a paginated TLE API
client, immutable viewer state, caching, concurrent tracking and
JSON/CSV export.
"""

from sattrak.domain.orbital_mechanics import (
    OrbitalConstants,
    RotationModel,
    solve_kepler,
    semi_major_axis_km,
    true_anomaly,
    orbital_radius_km,
    perifocal_position,
    perifocal_to_inertial,
)
from sattrak.domain.tle import (
    OrbitalElements,
    parse_tle,
    format_tle_line2,
    tle_checksum,
)
from sattrak.domain.propagation import (
    StatePosition,
    Trajectory,
    DegenerateOrbitError,
    KeplerPropagator,
    current_position,
    sample_trajectory,
    sample_trajectory_strict,
)
from sattrak.domain.catalog import (
    SatelliteCatalogEntry,
    CatalogPage,
    parse_catalog_page,
)
from sattrak.domain.viewer_state import (
    ViewerState,
    go_to_page,
    next_page,
    previous_page,
    with_catalog,
    select,
    clear_selection,
)

__version__ = "1.0.0"
