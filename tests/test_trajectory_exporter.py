# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for JSON and CSV trajectory export."""
import csv
import json
import math

import pytest

from sattrak.adapters.trajectory_exporter import (
    CsvTrajectoryExporter,
    JsonTrajectoryExporter,
)
from sattrak.domain.catalog import SatelliteCatalogEntry
from sattrak.ports.export import TrackedSatellite, TrajectoryExporter


ISS = SatelliteCatalogEntry(25544, "ISS (ZARYA)", "1 25544U", "2 25544")
BROKEN = SatelliteCatalogEntry(1, "BROKEN", "1 00001U", "2 00001")


@pytest.fixture
def tracked():
    return [
        TrackedSatellite(
            entry=ISS,
            position=(1.0, 0.5, -0.25),
            trajectory=[(1.0, 0.5, -0.25), (0.9, 0.6, -0.2), (0.8, 0.7, -0.1)],
        ),
        TrackedSatellite(
            entry=BROKEN,
            position=(math.nan, math.nan, math.nan),
            trajectory=[(math.nan, math.inf, 0.0)],
        ),
    ]


# ── JSON ─────────────────────────────────────────────────────────────

class TestJsonTrajectoryExporter:

    def test_implements_port(self):
        assert isinstance(JsonTrajectoryExporter(), TrajectoryExporter)

    def test_returns_count(self, tracked, tmp_path):
        assert JsonTrajectoryExporter().export(tracked, str(tmp_path / "out.json")) == 2

    def test_structure(self, tracked, tmp_path):
        path = tmp_path / "out.json"
        JsonTrajectoryExporter().export(tracked, str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["satellite_id"] == 25544
        assert data[0]["name"] == "ISS (ZARYA)"
        assert data[0]["position"] == [1.0, 0.5, -0.25]
        assert len(data[0]["trajectory"]) == 3

    def test_non_finite_as_null(self, tracked, tmp_path):
        path = tmp_path / "out.json"
        JsonTrajectoryExporter().export(tracked, str(path))
        text = path.read_text(encoding="utf-8")
        assert "NaN" not in text
        assert "Infinity" not in text
        data = json.loads(text)
        assert data[1]["position"] == [None, None, None]
        assert data[1]["trajectory"] == [[None, None, 0.0]]

    def test_empty(self, tmp_path):
        path = tmp_path / "out.json"
        assert JsonTrajectoryExporter().export([], str(path)) == 0
        assert json.loads(path.read_text(encoding="utf-8")) == []


# ── CSV ──────────────────────────────────────────────────────────────

class TestCsvTrajectoryExporter:

    def _rows(self, path):
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.reader(f))

    def test_implements_port(self):
        assert isinstance(CsvTrajectoryExporter(), TrajectoryExporter)

    def test_header(self, tracked, tmp_path):
        path = tmp_path / "out.csv"
        CsvTrajectoryExporter().export(tracked, str(path))
        assert self._rows(path)[0] == ["satellite_id", "name", "kind", "index", "x", "y", "z"]

    def test_one_row_per_point(self, tracked, tmp_path):
        path = tmp_path / "out.csv"
        assert CsvTrajectoryExporter().export(tracked, str(path)) == 2
        rows = self._rows(path)[1:]
        # ISS: 1 position + 3 trajectory; BROKEN: 1 + 1
        assert len(rows) == 6
        assert rows[0][:4] == ["25544", "ISS (ZARYA)", "position", "0"]
        assert [r[3] for r in rows[1:4]] == ["0", "1", "2"]
        assert all(r[2] == "trajectory" for r in rows[1:4])

    def test_values_formatted(self, tracked, tmp_path):
        path = tmp_path / "out.csv"
        CsvTrajectoryExporter().export(tracked, str(path))
        row = self._rows(path)[1]
        assert row[4:] == ["1.000000000", "0.500000000", "-0.250000000"]

    def test_non_finite_empty_cells(self, tracked, tmp_path, caplog):
        path = tmp_path / "out.csv"
        CsvTrajectoryExporter().export(tracked, str(path))
        rows = self._rows(path)
        assert rows[-2][4:] == ["", "", ""]
        assert rows[-1][4:] == ["", "", "0.000000000"]
        assert "BROKEN: 2 point(s)" in caplog.text
