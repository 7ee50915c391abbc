"""High-level orchestration of the map build process."""

from __future__ import annotations

from pathlib import Path

from .cli import parse_args
from .core import MapError, ProgressReporter, logger, setup_logging
from .data import DEFAULT_GAZETTEER, Gazetteer, load_table, run_pipeline, selectable_attributes
from .frontend import render_map

EXIT_SUCCESS = 0
EXIT_FAILURE = 2


def _ensure_output_path(path: Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def build_map(args, gazetteer: Gazetteer = DEFAULT_GAZETTEER) -> Path:
    """Run the pipeline for ``args.data`` and write the rendered map."""
    with ProgressReporter(3, label="Map build", disable=not args.verbose) as progress:
        result = run_pipeline(args.data, args.attribute, gazetteer)
        progress.step("Reconciled cities")
        m = render_map(
            result,
            gazetteer,
            tiles=args.tiles,
            zoom_start=args.zoom_start,
            sidebar_width=args.sidebar_width,
        )
        progress.step("Rendered markers")
        output_path = _ensure_output_path(Path(args.out))
        m.save(str(output_path))
        progress.finish("Saved map")
    logger.info(
        "Wrote %s (%d markers, %d of %d rows unmatched)",
        output_path,
        len(result.markers),
        result.unmatched_count,
        result.rows_in,
    )
    return output_path


def run(args, gazetteer: Gazetteer = DEFAULT_GAZETTEER) -> int:
    setup_logging(args.verbose)
    try:
        if args.list_cities:
            for name in gazetteer.display_names():
                print(name)
            return EXIT_SUCCESS
        if args.list_attributes:
            for name in selectable_attributes(load_table(args.data).columns):
                print(name)
            return EXIT_SUCCESS
        build_map(args, gazetteer)
    except MapError as exc:
        logger.error("%s: %s", exc.error_code, exc)
        return EXIT_FAILURE
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    return run(parse_args(argv))
