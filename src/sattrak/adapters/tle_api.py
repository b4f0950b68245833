# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
TLE API adapter: fetches paginated satellite catalogs.

External dependencies (urllib, json) are confined to this layer.

Data source:
    TLE API: https://tle.ivanstanojevic.me/api/tle/
    Hydra collection: `member` records carry name, satelliteId, date,
    line1 and line2; `view` links to first/previous/next/last pages.
"""
import json
import logging
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import urlencode

from sattrak.domain.catalog import (
    CatalogPage,
    SatelliteCatalogEntry,
    parse_catalog_entry,
    parse_catalog_page,
)
from sattrak.ports.catalog import CatalogSource


_log = logging.getLogger(__name__)

BASE_URL = "https://tle.ivanstanojevic.me/api/tle/"


class TleApiAdapter(CatalogSource):
    """
    Fetches catalog pages from the TLE API.

    Requests are plain GETs, one per page; there is no retry. Network
    failures surface as ConnectionError so callers can keep showing
    the previous page.
    """

    def __init__(self, base_url: str = BASE_URL, timeout: int = 30):
        self._base_url = base_url
        self._timeout = timeout

    def fetch_page(
        self,
        page: int = 1,
        search: str | None = None,
        page_size: int | None = None,
    ) -> CatalogPage:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        params: dict[str, Any] = {"page": page}
        if search:
            params["search"] = search
        if page_size:
            params["page-size"] = page_size

        _log.info("Fetching catalog page %d", page)
        payload = self._fetch_json(f"{self._base_url}?{urlencode(params)}")
        catalog = parse_catalog_page(payload, page)
        if catalog.skipped:
            _log.warning(
                "Skipped %d malformed catalog record(s) on page %d",
                catalog.skipped, page,
            )
        return catalog

    def fetch_entry(self, satellite_id: int) -> SatelliteCatalogEntry:
        payload = self._fetch_json(f"{self._base_url}{satellite_id}")
        try:
            return parse_catalog_entry(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed record for satellite {satellite_id}: {e}") from e

    def _fetch_json(self, url: str) -> dict[str, Any]:
        """Fetch JSON data from the TLE API."""
        req = urllib.request.Request(
            url,
            headers={"User-Agent": "SatTrak/1.0", "Accept": "application/json"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                return json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raise ConnectionError(f"TLE API error {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"TLE API connection failed: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise ConnectionError(f"TLE API returned invalid JSON: {e}") from e
