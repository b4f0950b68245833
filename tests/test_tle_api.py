# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the TLE API catalog adapter (network mocked)."""
import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from sattrak.adapters.tle_api import BASE_URL, TleApiAdapter
from sattrak.domain.catalog import CatalogPage, SatelliteCatalogEntry
from sattrak.ports.catalog import CatalogSource


ISS_RECORD = {
    "satelliteId": 25544,
    "name": "ISS (ZARYA)",
    "date": "2024-08-15T22:23:33+00:00",
    "line1": "1 25544U 98067A   24228.93302811  .00023181  00000+0  41033-3 0  9993",
    "line2": "2 25544  51.6409  19.3451 0005404 204.9983 297.3069 15.50171321467816",
}

SAMPLE_PAGE = {
    "@type": "Tle[]",
    "totalItems": 60,
    "member": [ISS_RECORD],
    "parameters": {"search": "*", "page": 2, "page-size": 20},
    "view": {
        "@id": f"{BASE_URL}?page=2",
        "first": f"{BASE_URL}?page=1",
        "previous": f"{BASE_URL}?page=1",
        "next": f"{BASE_URL}?page=3",
        "last": f"{BASE_URL}?page=3",
    },
}


def _response(body: bytes):
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


# ── Port ─────────────────────────────────────────────────────────────

class TestTleApiAdapterPort:

    def test_implements_catalog_source(self):
        assert isinstance(TleApiAdapter(), CatalogSource)

    def test_default_base_url(self):
        assert TleApiAdapter()._base_url == "https://tle.ivanstanojevic.me/api/tle/"


# ── fetch_page ───────────────────────────────────────────────────────

class TestFetchPage:

    def test_returns_catalog_page(self):
        adapter = TleApiAdapter()
        with patch.object(adapter, '_fetch_json', return_value=SAMPLE_PAGE):
            page = adapter.fetch_page(2)
        assert isinstance(page, CatalogPage)
        assert page.page == 2
        assert page.last_page == 3
        assert page.entries[0].name == "ISS (ZARYA)"

    def test_query_parameters(self):
        adapter = TleApiAdapter(base_url="http://example.test/api/tle/")
        with patch.object(adapter, '_fetch_json', return_value=SAMPLE_PAGE) as fetch:
            adapter.fetch_page(2, search="ISS", page_size=20)
        url = fetch.call_args[0][0]
        assert url.startswith("http://example.test/api/tle/?")
        assert "page=2" in url
        assert "search=ISS" in url
        assert "page-size=20" in url

    def test_default_query_is_page_only(self):
        adapter = TleApiAdapter()
        with patch.object(adapter, '_fetch_json', return_value=SAMPLE_PAGE) as fetch:
            adapter.fetch_page()
        assert fetch.call_args[0][0] == f"{BASE_URL}?page=1"

    def test_page_below_one_rejected(self):
        with pytest.raises(ValueError):
            TleApiAdapter().fetch_page(0)

    def test_skipped_records_logged(self, caplog):
        payload = {**SAMPLE_PAGE, "member": [ISS_RECORD, {"name": "BROKEN"}]}
        adapter = TleApiAdapter()
        with patch.object(adapter, '_fetch_json', return_value=payload):
            page = adapter.fetch_page(2)
        assert page.skipped == 1
        assert "Skipped 1 malformed" in caplog.text


# ── fetch_entry ──────────────────────────────────────────────────────

class TestFetchEntry:

    def test_single_record(self):
        adapter = TleApiAdapter()
        with patch.object(adapter, '_fetch_json', return_value=ISS_RECORD) as fetch:
            entry = adapter.fetch_entry(25544)
        assert isinstance(entry, SatelliteCatalogEntry)
        assert entry.satellite_id == 25544
        assert fetch.call_args[0][0] == f"{BASE_URL}25544"

    def test_malformed_record(self):
        adapter = TleApiAdapter()
        with patch.object(adapter, '_fetch_json', return_value={"name": "X"}):
            with pytest.raises(ValueError, match="25544"):
                adapter.fetch_entry(25544)


# ── HTTP layer ───────────────────────────────────────────────────────

class TestFetchJson:

    def test_decodes_json(self):
        body = json.dumps(SAMPLE_PAGE).encode("utf-8")
        with patch("urllib.request.urlopen", return_value=_response(body)) as urlopen:
            payload = TleApiAdapter(timeout=5)._fetch_json(f"{BASE_URL}?page=2")
        assert payload["totalItems"] == 60
        request = urlopen.call_args[0][0]
        assert request.get_header("User-agent") == "SatTrak/1.0"
        assert urlopen.call_args[1]["timeout"] == 5

    def test_connection_failure(self):
        error = urllib.error.URLError("unreachable")
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(ConnectionError, match="connection failed"):
                TleApiAdapter().fetch_page(1)

    def test_http_error(self):
        error = urllib.error.HTTPError(BASE_URL, 503, "Service Unavailable", {}, io.BytesIO())
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(ConnectionError, match="503"):
                TleApiAdapter().fetch_page(1)

    def test_invalid_json(self):
        with patch("urllib.request.urlopen", return_value=_response(b"<html>")):
            with pytest.raises(ConnectionError, match="invalid JSON"):
                TleApiAdapter().fetch_page(1)
