"""Command-line entry point for converting shapefiles into layer files.

Usage:
    sikyon-convert-shapefile <input.shp> <output.geojson>

Example:
    $ sikyon-convert-shapefile data/sikyon.shp public/data/pottery.geojson
"""

from __future__ import annotations

import argparse
import pathlib
import sys

from loguru import logger

from sikyon.services import convert_shapefile
from sikyon.utils import gdal_helpers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sikyon-convert-shapefile",
        description="Convert a shapefile into a GeoJSON layer file.",
    )
    parser.add_argument("input", type=pathlib.Path, help="source .shp file")
    parser.add_argument(
        "output", type=pathlib.Path, help="destination .geojson file"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the conversion and report the result.

    Args:
        argv: Arguments without the program name; defaults to sys.argv.

    Returns:
        Process exit status, 0 on success and 1 on failure.
    """
    args = build_parser().parse_args(argv)
    try:
        summary = convert_shapefile.convert_shapefile(args.input, args.output)
    except gdal_helpers.CommandError as exc:
        logger.error("Error converting shapefile: {}", exc)
        return 1

    print(f"Successfully converted to {summary.destination}")
    print(f"  Features: {summary.feature_count}")
    if summary.property_names:
        print(f"  Sample properties: {', '.join(summary.property_names)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
