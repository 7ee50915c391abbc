from __future__ import annotations
import argparse
import json
import tomllib
from pathlib import Path

from .core import ConfigurationError

DEFAULT_OUT = "html/index.html"
DEFAULT_TILES = "OpenStreetMap"
DEFAULT_ZOOM = 8
DEFAULT_SIDEBAR_WIDTH = 320


def _load_config(path: str) -> dict[str, object]:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    try:
        if suffix in {".toml", ".tml"}:
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid config file {config_path}: {exc}") from exc
    raise ConfigurationError(f"Unsupported config format: {config_path.suffix}")


def _as_int(value: object, field: str) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{field} must be an integer (got {value!r})") from exc


def _merge_config(args: argparse.Namespace, config: dict[str, object]) -> None:
    # Allow optional grouping inside the config (e.g. {"paths": {...}}).
    flat: dict[str, object] = {}
    if config:
        flat.update(config)
        for key in ("paths", "options"):
            section = config.get(key)
            if isinstance(section, dict):
                flat.update(section)

    defaults = {
        "data": None,
        "out": DEFAULT_OUT,
        "tiles": DEFAULT_TILES,
        "zoom_start": DEFAULT_ZOOM,
        "sidebar_width": DEFAULT_SIDEBAR_WIDTH,
    }
    for field, default in defaults.items():
        if getattr(args, field) is None:
            setattr(args, field, flat.get(field, default))
    if not args.verbose and isinstance(flat.get("verbose"), bool):
        args.verbose = flat["verbose"]

    if args.attribute is None:
        configured = flat.get("attributes")
        if isinstance(configured, str):
            args.attribute = [configured]
        elif isinstance(configured, list):
            args.attribute = [str(name) for name in configured]
        elif configured is not None:
            raise ConfigurationError(f"attributes must be a list of column names (got {configured!r})")
        else:
            args.attribute = []

    args.zoom_start = _as_int(args.zoom_start, "zoom_start")
    args.sidebar_width = _as_int(args.sidebar_width, "sidebar_width")
    if args.data is not None:
        args.data = str(args.data)
    args.out = str(args.out)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Plot a city-keyed CSV onto a map of Albanian cities")
    ap.add_argument("--config", help="Optional TOML/JSON config file with argument defaults")
    ap.add_argument("--data", help="CSV file with a 'city' column")
    ap.add_argument(
        "-a", "--attribute", action="append",
        help="Column to show in the marker popups (repeat for several; order is kept)",
    )
    ap.add_argument("--out", help=f"Output HTML (default: {DEFAULT_OUT})")
    ap.add_argument("--tiles", help=f"Folium tile set (default: {DEFAULT_TILES})")
    ap.add_argument("--zoom-start", type=int, help=f"Initial zoom level (default: {DEFAULT_ZOOM})")
    ap.add_argument("--sidebar-width", type=int, help=f"Sidebar width in px (default: {DEFAULT_SIDEBAR_WIDTH})")
    ap.add_argument("--list-attributes", action="store_true", help="Print the selectable columns of --data and exit")
    ap.add_argument("--list-cities", action="store_true", help="Print the predefined cities and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return ap


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        config = _load_config(args.config) if args.config else {}
        _merge_config(args, config)
    except ConfigurationError as exc:
        ap.error(str(exc))

    if args.data is None and not args.list_cities:
        ap.error("the following arguments are required (supply via CLI or config): data")

    return args
