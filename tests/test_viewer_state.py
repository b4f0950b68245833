# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for immutable viewer state transitions."""
import pytest

from sattrak.domain.catalog import CatalogPage, SatelliteCatalogEntry
from sattrak.domain.viewer_state import (
    DEFAULT_SECTION_FRACTION,
    ViewerState,
    clear_selection,
    go_to_page,
    next_page,
    previous_page,
    select,
    with_catalog,
)


ISS = SatelliteCatalogEntry(
    satellite_id=25544,
    name="ISS (ZARYA)",
    line1="1 25544U 98067A   24228.93302811  .00023181  00000+0  41033-3 0  9993",
    line2="2 25544  51.6409  19.3451 0005404 204.9983 297.3069 15.50171321467816",
)


def _page(page=1, last_page=3, entries=(ISS,)):
    return CatalogPage(
        page=page,
        entries=tuple(entries),
        total_items=last_page * 20,
        last_page=last_page,
        has_next=page < last_page,
        has_previous=page > 1,
    )


class TestInitialState:

    def test_defaults(self):
        state = ViewerState()
        assert state.page == 1
        assert state.catalog is None
        assert state.selected is None
        assert state.section_fraction == DEFAULT_SECTION_FRACTION == 1.0 / 16.0

    def test_loading_until_catalog(self):
        state = ViewerState()
        assert state.is_loading
        assert not with_catalog(state, _page()).is_loading


class TestPaging:

    def test_next_page_drops_catalog(self):
        state = with_catalog(ViewerState(), _page())
        moved = next_page(state)
        assert moved.page == 2
        assert moved.catalog is None
        assert moved.is_loading

    def test_previous_page_clamped_at_one(self):
        state = ViewerState()
        assert previous_page(state) is state

    def test_clamped_to_last_page(self):
        state = with_catalog(ViewerState(), _page(page=3, last_page=3))
        assert next_page(state) is state

    def test_jump_clamped(self):
        state = with_catalog(ViewerState(), _page(last_page=4))
        assert go_to_page(state, 99).page == 4
        assert go_to_page(state, -5).page == 1

    def test_unknown_bounds_allow_forward(self):
        assert go_to_page(ViewerState(), 7).page == 7

    def test_selection_survives_page_change(self):
        state = select(with_catalog(ViewerState(), _page()), 25544)
        assert next_page(state).selected == ISS

    def test_original_state_untouched(self):
        state = with_catalog(ViewerState(), _page())
        next_page(state)
        assert state.page == 1
        assert state.catalog is not None


class TestCatalogAndSelection:

    def test_with_catalog_sets_page(self):
        state = with_catalog(ViewerState(page=2), _page(page=2))
        assert state.page == 2
        assert state.catalog.page == 2

    def test_reload_replaces_catalog(self):
        first = _page()
        second = _page(entries=())
        state = with_catalog(with_catalog(ViewerState(), first), second)
        assert state.catalog is second

    def test_select(self):
        state = select(with_catalog(ViewerState(), _page()), 25544)
        assert state.selected is ISS

    def test_select_without_catalog(self):
        with pytest.raises(ValueError, match="No catalog"):
            select(ViewerState(), 25544)

    def test_select_unknown_id(self):
        with pytest.raises(ValueError, match="not found"):
            select(with_catalog(ViewerState(), _page()), 99999)

    def test_clear_selection(self):
        state = select(with_catalog(ViewerState(), _page()), 25544)
        assert clear_selection(state).selected is None

    def test_state_is_frozen(self):
        with pytest.raises(AttributeError):
            ViewerState().page = 2
