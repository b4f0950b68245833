# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite catalog records.

Domain objects for one page of the TLE API's hydra collection, and the
conversion from its JSON payload. The propagation core only reads
line1/line2 from these entries; nothing here is ever mutated.
"""
import math
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlparse


@dataclass(frozen=True)
class SatelliteCatalogEntry:
    """One catalog record: display name and raw TLE pair."""
    satellite_id: int
    name: str
    line1: str
    line2: str
    date: str = ""


@dataclass(frozen=True)
class CatalogPage:
    """A page of catalog entries plus its position in the collection."""
    page: int
    entries: tuple[SatelliteCatalogEntry, ...]
    total_items: int
    last_page: int
    has_next: bool
    has_previous: bool
    skipped: int = 0

    def find(self, satellite_id: int) -> SatelliteCatalogEntry | None:
        for entry in self.entries:
            if entry.satellite_id == satellite_id:
                return entry
        return None


def parse_catalog_entry(record: dict[str, Any]) -> SatelliteCatalogEntry:
    """
    Convert one hydra `member` record.

    Raises:
        KeyError: If name, line1, line2 or satelliteId is missing.
        ValueError: If satelliteId is not an integer.
    """
    return SatelliteCatalogEntry(
        satellite_id=int(record["satelliteId"]),
        name=record["name"],
        line1=record["line1"],
        line2=record["line2"],
        date=record.get("date", ""),
    )


def _page_from_url(url: str | None) -> int | None:
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def parse_catalog_page(payload: dict[str, Any], page: int) -> CatalogPage:
    """
    Convert a TLE API collection payload into a CatalogPage.

    Members missing required fields are dropped and counted in
    `skipped`. The last page comes from `view.last` when present,
    otherwise from totalItems and the page size.

    Args:
        payload: Decoded JSON collection (`member`, `totalItems`, `view`).
        page: Requested page number (1-based).

    Returns:
        CatalogPage.
    """
    entries = []
    skipped = 0
    for record in payload.get("member", []):
        try:
            entries.append(parse_catalog_entry(record))
        except (KeyError, TypeError, ValueError):
            skipped += 1

    total_items = int(payload.get("totalItems", len(entries)))
    view = payload.get("view", {})

    last_page = _page_from_url(view.get("last"))
    if last_page is None:
        page_size = payload.get("parameters", {}).get("page-size") or len(entries) or 1
        last_page = max(1, math.ceil(total_items / page_size))

    return CatalogPage(
        page=page,
        entries=tuple(entries),
        total_items=total_items,
        last_page=last_page,
        has_next="next" in view,
        has_previous="previous" in view,
        skipped=skipped,
    )
