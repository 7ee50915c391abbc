from __future__ import annotations

from html import escape
from importlib import resources
from string import Template
from typing import Any

import folium

from ..data import LABEL_SEPARATOR, Gazetteer, MarkerRecord, PipelineResult


def _load_template(name: str) -> str:
    return resources.files(__package__).joinpath(f"templates/{name}").read_text(encoding="utf-8")


SIDEBAR_HTML_TEMPLATE = Template(_load_template("sidebar.html"))

DEFAULT_TITLE = "UAS-Urban Albanian Statistics"
DEFAULT_ZOOM = 8
MAP_HEIGHT = "700px"


def popup_html(marker: MarkerRecord) -> str:
    lines = marker.label.split(LABEL_SEPARATOR)
    rendered = []
    for line in lines:
        name, sep, value = line.partition(": ")
        if sep:
            rendered.append(f"<strong>{escape(name)}:</strong> {escape(value)}")
        else:
            rendered.append(escape(line))
    return "<br>".join(rendered)


def add_markers_layer(m: folium.Map, markers: list[MarkerRecord], name: str = "Cities") -> folium.FeatureGroup:
    layer = folium.FeatureGroup(name=name, show=True, overlay=True)
    for marker in markers:
        folium.Marker(
            location=[marker.latitude, marker.longitude],
            popup=folium.Popup(popup_html(marker), max_width=320),
            tooltip=escape(marker.city) if marker.city else None,
        ).add_to(layer)
    layer.add_to(m)
    return layer


def map_view(markers: list[MarkerRecord], gazetteer: Gazetteer) -> dict[str, Any]:
    """Centre and bounds for the map: the markers if any, else the whole gazetteer."""
    if markers:
        lats = [mk.latitude for mk in markers]
        lons = [mk.longitude for mk in markers]
        bounds = ((min(lats), min(lons)), (max(lats), max(lons)))
    else:
        bounds = gazetteer.bounds()
    if bounds is None:
        return {"center": [41.15, 20.17], "bounds": None}
    (lat_min, lon_min), (lat_max, lon_max) = bounds
    center = [(lat_min + lat_max) / 2.0, (lon_min + lon_max) / 2.0]
    if lat_min == lat_max and lon_min == lon_max:
        return {"center": center, "bounds": None}
    return {"center": center, "bounds": [[lat_min, lon_min], [lat_max, lon_max]]}


def sidebar_html(
    gazetteer: Gazetteer,
    result: PipelineResult,
    sidebar_width: int = 320,
    title: str = DEFAULT_TITLE,
) -> str:
    if result.unmatched_cities:
        unmatched = ", ".join(escape(name) for name in result.unmatched_cities)
        unmatched_html = f'<div class="uas-unmatched"><strong>Not found:</strong> {unmatched}</div>'
    else:
        unmatched_html = ""
    return SIDEBAR_HTML_TEMPLATE.substitute(
        sidebar_width=int(sidebar_width),
        title=escape(title),
        markers=format(len(result.markers), ","),
        rows_in=format(result.rows_in, ","),
        unmatched_count=format(result.unmatched_count, ","),
        attributes=escape(", ".join(result.attributes)),
        unmatched_html=unmatched_html,
        cities=escape(", ".join(gazetteer.keys())),
    )


def render_map(
    result: PipelineResult,
    gazetteer: Gazetteer,
    tiles: str = "OpenStreetMap",
    zoom_start: int = DEFAULT_ZOOM,
    sidebar_width: int = 320,
) -> folium.Map:
    view = map_view(result.markers, gazetteer)
    m = folium.Map(location=view["center"], zoom_start=zoom_start, tiles=tiles, height=MAP_HEIGHT)
    add_markers_layer(m, result.markers)
    if view["bounds"] is not None:
        m.fit_bounds(view["bounds"])
    m.get_root().html.add_child(folium.Element(sidebar_html(gazetteer, result, sidebar_width)))
    return m
