# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Trajectory exporters: the hand-off from propagation to a renderer.

JSON keeps one object per satellite with its polyline; CSV flattens to
one row per point. Coordinates are in Earth radii. Non-finite
coordinates are written as null (JSON) or empty cells (CSV).
External dependencies (json, csv, file I/O) are confined to this adapter.
"""
import csv
import json
import logging
import math

from sattrak.domain.propagation import StatePosition
from sattrak.ports.export import TrackedSatellite, TrajectoryExporter


logger = logging.getLogger(__name__)

_CSV_HEADER = ['satellite_id', 'name', 'kind', 'index', 'x', 'y', 'z']


def _json_point(point: StatePosition) -> list[float | None]:
    return [c if math.isfinite(c) else None for c in point]


def _csv_cell(value: float) -> str:
    return f'{value:.9f}' if math.isfinite(value) else ''


class JsonTrajectoryExporter(TrajectoryExporter):
    """Exports tracked satellites to a JSON array."""

    def export(self, tracked: list[TrackedSatellite], path: str) -> int:
        records = [
            {
                'satellite_id': sat.entry.satellite_id,
                'name': sat.entry.name,
                'position': _json_point(sat.position),
                'trajectory': [_json_point(p) for p in sat.trajectory],
            }
            for sat in tracked
        ]
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        return len(records)


class CsvTrajectoryExporter(TrajectoryExporter):
    """Exports tracked satellites to CSV, one row per point.

    The current position is written with kind 'position' and index 0,
    followed by the trajectory rows with kind 'trajectory'.
    """

    def export(self, tracked: list[TrackedSatellite], path: str) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_CSV_HEADER)

            for sat in tracked:
                rows = [('position', 0, sat.position)]
                rows.extend(('trajectory', i, p) for i, p in enumerate(sat.trajectory))
                non_finite = 0
                for kind, index, point in rows:
                    if not all(math.isfinite(c) for c in point):
                        non_finite += 1
                    writer.writerow([
                        sat.entry.satellite_id,
                        sat.entry.name,
                        kind,
                        index,
                        *(_csv_cell(c) for c in point),
                    ])
                if non_finite:
                    logger.warning(
                        "%s: %d point(s) with non-finite coordinates",
                        sat.entry.name, non_finite,
                    )

        return len(tracked)
