"""Coordinate reprojection from the Greek Grid to WGS84.

Survey layers are recorded in the Greek Grid (EPSG:2100, GGRS87), a
Transverse Mercator projection on GRS80 with a seven-parameter shift to
WGS84. The map client expects longitude/latitude pairs, so every
coordinate read from a layer file passes through transform_point().

Coordinates that already look geographic (x within [-180, 180] and y within
[-90, 90]) are returned as they are. A grid coordinate could fall inside
that range by coincidence; the thresholds are kept exactly as they are
because published layers depend on them.

Example:
    Reproject a grid coordinate:
        >>> from sikyon.geo.projection import transform_point
        >>> lon, lat = transform_point([500000, 4207000])
        >>> # lon ~= 24.0, lat ~= 38.0

    Geographic input passes through untouched:
        >>> transform_point([22.72, 37.99, 120.5])
        [22.72, 37.99, 120.5]
"""

from __future__ import annotations

import functools
import math
import numbers
from typing import TYPE_CHECKING

import pyproj
from loguru import logger
from pyproj import exceptions as pyproj_exceptions

if TYPE_CHECKING:
    from collections.abc import Sequence

GREEK_GRID_PROJ = (
    "+proj=tmerc +lat_0=0 +lon_0=24 +k=0.9996 +x_0=500000 +y_0=0 "
    "+ellps=GRS80 +towgs84=-199.87,74.79,246.62,0,0,0,0 +units=m +no_defs"
)
WGS84 = "EPSG:4326"

Coordinate = list[float]


@functools.lru_cache(maxsize=1)
def grid_to_wgs84() -> pyproj.Transformer:
    """Build the Greek Grid to WGS84 transformer once per process."""
    return pyproj.Transformer.from_crs(
        pyproj.CRS.from_proj4(GREEK_GRID_PROJ),
        WGS84,
        always_xy=True,
    )


def is_geographic(x: float, y: float) -> bool:
    """Return True when the pair already lies in longitude/latitude range."""
    return -180 <= x <= 180 and -90 <= y <= 90


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def transform_point(coord: Sequence[float]) -> Sequence[float]:
    """Transform one coordinate from the Greek Grid to WGS84.

    Only the first two components are projected; elevation and any further
    dimensions are appended to the result unchanged. The function never
    raises: when the input cannot be projected, the failure is logged and
    a copy of the original coordinate is returned.

    Args:
        coord: ``[x, y, *rest]`` in Greek Grid metres, or already
            ``[lon, lat, *rest]``.

    Returns:
        ``[lon, lat, *rest]`` in WGS84, or the untransformed coordinate when
        it is already geographic, malformed, or the projection fails.
    """
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        return coord

    x, y = coord[0], coord[1]
    if not (_is_number(x) and _is_number(y)):
        logger.bind(event="projection_failed").warning(
            "Non-numeric coordinate left untransformed: {}", coord
        )
        return coord[:]

    if is_geographic(x, y):
        return coord[:]

    try:
        lon, lat = grid_to_wgs84().transform(x, y, errcheck=True)
    except pyproj_exceptions.ProjError as exc:
        logger.bind(event="projection_failed").warning(
            "Error transforming coordinates {}: {}", coord, exc
        )
        return coord[:]

    if not (math.isfinite(lon) and math.isfinite(lat)):
        logger.bind(event="projection_failed").warning(
            "Projection produced non-finite result for {}", coord
        )
        return coord[:]

    return [lon, lat, *coord[2:]]
