"""Frontend helpers for building the Folium map and HTML."""

from .layout import (
    add_markers_layer,
    map_view,
    popup_html,
    render_map,
    sidebar_html,
)

__all__ = [
    "add_markers_layer",
    "map_view",
    "popup_html",
    "render_map",
    "sidebar_html",
]
