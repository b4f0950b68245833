# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces between the propagation core and the outside world.

Adapters implement these to fetch catalogs, propagate with external
libraries and export renderer input.
"""
from sattrak.ports.catalog import CatalogSource
from sattrak.ports.export import TrackedSatellite, TrajectoryExporter
from sattrak.ports.propagator import TrajectoryPropagator

__all__ = [
    "CatalogSource",
    "TrackedSatellite",
    "TrajectoryExporter",
    "TrajectoryPropagator",
]
