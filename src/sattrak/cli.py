# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for satellite tracking.

Usage:
    # Browse the catalog
    sattrak --page 2
    sattrak --search ISS --page-size 10

    # Track one satellite from the catalog (two-body propagation)
    sattrak --satellite-id 25544
    sattrak --satellite-id 25544 --fraction 0.0625 --points 200

    # Track every satellite on a page, SGP4 (requires sgp4)
    sattrak --page 1 --track-page --propagator sgp4

    # Track a local TLE pair at a fixed instant
    sattrak --line1 "1 25544U ..." --line2 "2 25544 ..." --at 2024-08-16T00:00:00Z

    # Export renderer input
    sattrak --satellite-id 25544 --export-json iss.json --export-csv iss.csv
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from sattrak.adapters.concurrent_tracking import ConcurrentTracker
from sattrak.adapters.tle_api import BASE_URL, TleApiAdapter
from sattrak.adapters.trajectory_exporter import (
    CsvTrajectoryExporter,
    JsonTrajectoryExporter,
)
from sattrak.domain.catalog import CatalogPage, SatelliteCatalogEntry
from sattrak.domain.orbital_mechanics import RotationModel
from sattrak.domain.propagation import (
    DEFAULT_NUM_POINTS,
    DEFAULT_ORBIT_FRACTION,
    KeplerPropagator,
    validate_sampling,
)
from sattrak.domain.tle import parse_tle
from sattrak.ports.catalog import CatalogSource
from sattrak.ports.export import TrackedSatellite
from sattrak.ports.propagator import TrajectoryPropagator


def parse_instant(text: str) -> datetime:
    """Parse an ISO-8601 instant; trailing 'Z' and naive values mean UTC."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def build_propagator(name: str, rotation: RotationModel) -> TrajectoryPropagator:
    """Kepler (two-body, default) or SGP4 propagator."""
    if name == "sgp4":
        from sattrak.adapters.sgp4_propagator import Sgp4Propagator
        return Sgp4Propagator()
    return KeplerPropagator(rotation=rotation)


def run_catalog(
    source: CatalogSource,
    page: int = 1,
    search: str | None = None,
    page_size: int | None = None,
) -> CatalogPage:
    """Fetch a catalog page and print one line per satellite."""
    catalog = source.fetch_page(page, search=search, page_size=page_size)
    print(f"Satellites (page {catalog.page} of {catalog.last_page}, "
          f"{catalog.total_items} total):")
    for entry in catalog.entries:
        print(f"  {entry.satellite_id:>6}  {entry.name}")
    return catalog


def run_track(
    entries: list[SatelliteCatalogEntry],
    propagator: TrajectoryPropagator,
    num_points: int = DEFAULT_NUM_POINTS,
    orbit_fraction: float = DEFAULT_ORBIT_FRACTION,
    at: datetime | None = None,
    max_workers: int | None = None,
) -> list[TrackedSatellite]:
    """
    Propagate entries and print each current position.

    Returns:
        TrackedSatellite list, in the order of `entries`.
    """
    tracker = ConcurrentTracker(propagator, max_workers=max_workers)
    tracked = tracker.track_all(entries, num_points, orbit_fraction, at)
    for sat in tracked:
        x, y, z = sat.position
        print(f"{sat.entry.name}: position [{x:.6f}, {y:.6f}, {z:.6f}] R_E, "
              f"{len(sat.trajectory)} trajectory points")
    return tracked


def _local_entry(line1: str, line2: str, name: str | None) -> SatelliteCatalogEntry:
    catnr = parse_tle(line1, line2).norad_cat_id
    return SatelliteCatalogEntry(
        satellite_id=catnr if catnr is not None else 0,
        name=name or (f"SAT-{catnr}" if catnr is not None else "UNKNOWN"),
        line1=line1,
        line2=line2,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Browse a TLE catalog and compute satellite orbits for rendering"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    catalog_group = parser.add_argument_group('catalog')
    catalog_group.add_argument(
        '--api-url', default=BASE_URL,
        help=f"TLE API base URL (default: {BASE_URL})"
    )
    catalog_group.add_argument(
        '--timeout', type=int, default=30,
        help="HTTP timeout in seconds (default: 30)"
    )
    catalog_group.add_argument('--page', type=int, default=1, help="Catalog page (default: 1)")
    catalog_group.add_argument('--search', help="Filter catalog by name")
    catalog_group.add_argument('--page-size', type=int, help="Entries per page")

    track_group = parser.add_argument_group('tracking')
    track_group.add_argument('--satellite-id', type=int, help="NORAD catalog number to track")
    track_group.add_argument(
        '--track-page', action='store_true', default=False,
        help="Track every satellite on the selected page"
    )
    track_group.add_argument('--line1', help="TLE line 1 (track a local TLE)")
    track_group.add_argument('--line2', help="TLE line 2 (track a local TLE)")
    track_group.add_argument('--name', help="Display name for --line1/--line2")
    track_group.add_argument(
        '--points', type=int, default=DEFAULT_NUM_POINTS,
        help=f"Trajectory samples (default: {DEFAULT_NUM_POINTS})"
    )
    track_group.add_argument(
        '--fraction', type=float, default=DEFAULT_ORBIT_FRACTION,
        help="Fraction of a day the trajectory spans, in (0, 1] (default: 1.0)"
    )
    track_group.add_argument(
        '--at', type=parse_instant,
        help="Start instant, ISO-8601 UTC (default: now)"
    )
    track_group.add_argument(
        '--propagator', choices=['kepler', 'sgp4'], default='kepler',
        help="Propagation model (default: kepler)"
    )
    track_group.add_argument(
        '--rotation', choices=[m.value for m in RotationModel],
        default=RotationModel.FULL.value,
        help="Kepler perifocal-to-inertial z-row: full or legacy flattened (default: full)"
    )
    track_group.add_argument(
        '--workers', type=int,
        help="Thread pool size for --track-page"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument('--export-json', help="Write positions and trajectories to JSON")
    export_group.add_argument('--export-csv', help="Write positions and trajectories to CSV")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (args.line1 is None) != (args.line2 is None):
        parser.error("--line1 and --line2 must be given together")

    try:
        validate_sampling(args.points, args.fraction)
        source = TleApiAdapter(base_url=args.api_url, timeout=args.timeout)

        if args.line1 is not None:
            entries = [_local_entry(args.line1, args.line2, args.name)]
        elif args.satellite_id is not None:
            entries = [source.fetch_entry(args.satellite_id)]
        elif args.track_page:
            entries = list(run_catalog(source, args.page, args.search, args.page_size).entries)
        else:
            run_catalog(source, args.page, args.search, args.page_size)
            return

        propagator = build_propagator(args.propagator, RotationModel(args.rotation))
        tracked = run_track(
            entries,
            propagator,
            num_points=args.points,
            orbit_fraction=args.fraction,
            at=args.at,
            max_workers=args.workers,
        )

        if args.export_json:
            n = JsonTrajectoryExporter().export(tracked, args.export_json)
            print(f"Exported {n} satellites to {args.export_json}")

        if args.export_csv:
            n = CsvTrajectoryExporter().export(tracked, args.export_csv)
            print(f"Exported {n} satellites to {args.export_csv}")

    except ImportError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except (ConnectionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
