# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for satellite catalog sources.

Adapters handle the actual HTTP/API calls.
"""
from typing import Protocol, runtime_checkable

from sattrak.domain.catalog import CatalogPage, SatelliteCatalogEntry


@runtime_checkable
class CatalogSource(Protocol):
    """Port for fetching pages of the satellite catalog."""

    def fetch_page(
        self,
        page: int = 1,
        search: str | None = None,
        page_size: int | None = None,
    ) -> CatalogPage:
        """Fetch one page (1-based) of catalog entries."""
        ...

    def fetch_entry(self, satellite_id: int) -> SatelliteCatalogEntry:
        """Fetch a single entry by NORAD catalog number."""
        ...
