"""Shapefile to GeoJSON layer file conversion using ogr2ogr.

Converted files keep their Greek Grid coordinates; reprojection to WGS84
happens when the layer store loads them. Drop the output into the data
directory as ``<layerId>.geojson`` and restart the service to publish it.

Example:
    >>> from sikyon.services.convert_shapefile import convert_shapefile
    >>> summary = convert_shapefile(
    ...     Path("exports/sikyon_pottery.shp"),
    ...     Path("public/data/pottery.geojson"),
    ... )
    >>> summary.feature_count
    412
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, NamedTuple

from loguru import logger

from sikyon.geo import geometry
from sikyon.utils import gdal_helpers

if TYPE_CHECKING:
    import pathlib


class ConversionSummary(NamedTuple):
    destination: pathlib.Path
    feature_count: int
    property_names: list[str]


def convert_shapefile(
    source_path: pathlib.Path,
    destination_path: pathlib.Path,
) -> ConversionSummary:
    """Convert a shapefile into a GeoJSON FeatureCollection file.

    Args:
        source_path: Input ``.shp`` file (or any OGR-readable dataset).
        destination_path: GeoJSON file to write. Parent directories are
            created and an existing file is replaced.

    Returns:
        ConversionSummary with the feature count and the property names of
        the first feature.

    Raises:
        CommandError: If ogr2ogr is missing or fails, or if the output is
            not a FeatureCollection.
    """
    destination_path.parent.mkdir(parents=True, exist_ok=True)
    if destination_path.exists():
        destination_path.unlink()

    logger.info("Converting {} to GeoJSON...", source_path)
    gdal_helpers.run_command(
        (
            "ogr2ogr",
            "-f",
            "GeoJSON",
            destination_path,
            source_path,
        )
    )

    try:
        converted = json.loads(destination_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise gdal_helpers.CommandError(
            f"Unreadable ogr2ogr output {destination_path}: {exc}"
        ) from exc
    if not geometry.is_feature_collection(converted):
        raise gdal_helpers.CommandError(
            f"ogr2ogr output {destination_path} is not a FeatureCollection"
        )

    features = converted["features"]
    first_properties = (features[0].get("properties") or {}) if features else {}
    summary = ConversionSummary(
        destination=destination_path,
        feature_count=len(features),
        property_names=list(first_properties),
    )
    logger.info(
        "Converted {} to {} ({} features)",
        source_path,
        destination_path,
        summary.feature_count,
    )
    return summary
