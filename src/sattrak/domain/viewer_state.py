# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Viewer application state.

The browsing state (current page, the loaded page of the catalog, the
selected satellite) as an immutable value. Each transition returns a
new ViewerState; callers hold the current one and pass its selection
into the propagators as plain arguments.
"""
from dataclasses import dataclass, replace

from sattrak.domain.catalog import CatalogPage, SatelliteCatalogEntry


# The highlighted orbit section spans 1/16 of a day (~1.5 h, one LEO revolution).
DEFAULT_SECTION_FRACTION = 1.0 / 16.0


@dataclass(frozen=True)
class ViewerState:
    """Immutable browsing state."""
    page: int = 1
    catalog: CatalogPage | None = None
    selected: SatelliteCatalogEntry | None = None
    section_fraction: float = DEFAULT_SECTION_FRACTION

    @property
    def is_loading(self) -> bool:
        """True until the catalog for the current page has been supplied."""
        return self.catalog is None or self.catalog.page != self.page


def go_to_page(state: ViewerState, page: int) -> ViewerState:
    """
    Move to `page`, clamped to [1, last page].

    The loaded catalog is dropped when the page changes; the selection
    survives so the rendered orbit stays on screen while loading.
    """
    page = max(1, page)
    if state.catalog is not None:
        page = min(page, state.catalog.last_page)
    if page == state.page:
        return state
    return replace(state, page=page, catalog=None)


def next_page(state: ViewerState) -> ViewerState:
    return go_to_page(state, state.page + 1)


def previous_page(state: ViewerState) -> ViewerState:
    return go_to_page(state, state.page - 1)


def with_catalog(state: ViewerState, catalog: CatalogPage) -> ViewerState:
    """Attach a freshly fetched page (a reload replaces the current one)."""
    return replace(state, page=catalog.page, catalog=catalog)


def select(state: ViewerState, satellite_id: int) -> ViewerState:
    """
    Select a satellite from the loaded page.

    Raises:
        ValueError: If no page is loaded or the id is not on it.
    """
    if state.catalog is None:
        raise ValueError("No catalog page loaded")
    entry = state.catalog.find(satellite_id)
    if entry is None:
        raise ValueError(f"Satellite {satellite_id} not found on page {state.page}")
    return replace(state, selected=entry)


def clear_selection(state: ViewerState) -> ViewerState:
    return replace(state, selected=None)
