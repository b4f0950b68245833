# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for catalog fetching, SGP4 propagation, caching and export.

External dependencies (urllib, json, csv, sgp4, threads) are confined
to this layer. sgp4 is imported lazily by Sgp4Propagator.
"""
from sattrak.adapters.concurrent_tracking import ConcurrentTracker
from sattrak.adapters.sgp4_propagator import Sgp4Propagator
from sattrak.adapters.tle_api import TleApiAdapter
from sattrak.adapters.trajectory_cache import TrajectoryCache
from sattrak.adapters.trajectory_exporter import (
    CsvTrajectoryExporter,
    JsonTrajectoryExporter,
)

__all__ = [
    "ConcurrentTracker",
    "CsvTrajectoryExporter",
    "JsonTrajectoryExporter",
    "Sgp4Propagator",
    "TleApiAdapter",
    "TrajectoryCache",
]
