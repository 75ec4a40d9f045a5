"""GeoJSON geometry types and structure-preserving coordinate transforms.

Geometries arrive as plain GeoJSON mappings. The TypedDicts below name the
seven geometry kinds and the nesting depth of their coordinates; the
transform functions dispatch on the ``type`` tag and rebuild every level
of nesting, so the input is never modified in place.

Example:
    Reproject a whole layer:
        >>> from sikyon.geo import geometry
        >>> wgs84 = geometry.transform_feature_collection(raw_collection)

    Apply any coordinate-level function:
        >>> geometry.transform_geometry(
        ...     {"type": "Point", "coordinates": [1.0, 2.0]},
        ...     lambda c: [c[0] + 1, c[1]],
        ... )
        {'type': 'Point', 'coordinates': [2.0, 2.0]}
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from typing import Any, Literal, NotRequired, TypedDict

from sikyon.geo import projection

Position = Sequence[float]
CoordinateTransform = Callable[[Position], Position]


class PointGeometry(TypedDict):
    type: Literal["Point"]
    coordinates: Position


class LineStringGeometry(TypedDict):
    type: Literal["LineString"]
    coordinates: list[Position]


class MultiPointGeometry(TypedDict):
    type: Literal["MultiPoint"]
    coordinates: list[Position]


class PolygonGeometry(TypedDict):
    type: Literal["Polygon"]
    coordinates: list[list[Position]]


class MultiLineStringGeometry(TypedDict):
    type: Literal["MultiLineString"]
    coordinates: list[list[Position]]


class MultiPolygonGeometry(TypedDict):
    type: Literal["MultiPolygon"]
    coordinates: list[list[list[Position]]]


class GeometryCollection(TypedDict):
    type: Literal["GeometryCollection"]
    geometries: list[Geometry]


Geometry = (
    PointGeometry
    | LineStringGeometry
    | MultiPointGeometry
    | PolygonGeometry
    | MultiLineStringGeometry
    | MultiPolygonGeometry
    | GeometryCollection
)


class Feature(TypedDict):
    type: Literal["Feature"]
    id: NotRequired[str | int | None]
    geometry: Geometry | None
    properties: dict[str, Any] | None


class FeatureCollection(TypedDict):
    type: Literal["FeatureCollection"]
    features: list[Feature]


def empty_collection() -> FeatureCollection:
    """Return a new FeatureCollection without features."""
    return {"type": "FeatureCollection", "features": []}


def is_feature_collection(value: object) -> bool:
    """Return True for a mapping tagged FeatureCollection with a feature list."""
    return (
        isinstance(value, dict)
        and value.get("type") == "FeatureCollection"
        and isinstance(value.get("features"), list)
    )


def _map_positions(
    coords: Any, depth: int, fn: CoordinateTransform
) -> Any:
    """Apply ``fn`` to every position nested ``depth`` sequences deep."""
    if depth == 0:
        return fn(coords)
    return [_map_positions(item, depth - 1, fn) for item in coords]


def transform_geometry(
    geometry: Geometry | None,
    fn: CoordinateTransform = projection.transform_point,
) -> Geometry | None:
    """Apply a coordinate transform to every position of a geometry.

    Args:
        geometry: GeoJSON geometry mapping. Missing geometries, mappings
            without a ``type`` and unknown types are returned unchanged.
        fn: Coordinate-level transform; defaults to the Greek Grid to WGS84
            projection.

    Returns:
        A new geometry with the same nesting and the transformed positions.
        Members other than ``coordinates``/``geometries`` are copied.
    """
    if not isinstance(geometry, dict) or not geometry.get("type"):
        return geometry

    match geometry["type"]:
        case "Point":
            depth = 0
        case "LineString" | "MultiPoint":
            depth = 1
        case "Polygon" | "MultiLineString":
            depth = 2
        case "MultiPolygon":
            depth = 3
        case "GeometryCollection":
            transformed = copy.deepcopy(
                {k: v for k, v in geometry.items() if k != "geometries"}
            )
            transformed["geometries"] = [
                transform_geometry(member, fn)
                for member in geometry.get("geometries") or []
            ]
            return transformed  # type: ignore[return-value]
        case _:
            return geometry

    transformed = copy.deepcopy(
        {k: v for k, v in geometry.items() if k != "coordinates"}
    )
    if "coordinates" in geometry:
        coordinates = geometry["coordinates"]
        transformed["coordinates"] = (
            None if coordinates is None else _map_positions(coordinates, depth, fn)
        )
    return transformed  # type: ignore[return-value]


def transform_feature(
    feature: Feature,
    fn: CoordinateTransform = projection.transform_point,
) -> Feature:
    """Return a copy of ``feature`` with its geometry transformed."""
    transformed = copy.deepcopy(
        {k: v for k, v in feature.items() if k != "geometry"}
    )
    transformed["geometry"] = transform_geometry(feature.get("geometry"), fn)
    return transformed  # type: ignore[return-value]


def transform_feature_collection(
    collection: Any,
    fn: CoordinateTransform = projection.transform_point,
) -> Any:
    """Transform the geometry of every feature in a FeatureCollection.

    Anything that is not a FeatureCollection (including None) is returned
    unchanged. Feature order, ids, properties and collection-level members
    such as ``crs`` or ``name`` are carried over as copies.

    Args:
        collection: Parsed GeoJSON document.
        fn: Coordinate-level transform; defaults to the Greek Grid to WGS84
            projection.

    Returns:
        A new FeatureCollection, or the input when it is not one.
    """
    if not is_feature_collection(collection):
        return collection

    transformed = copy.deepcopy(
        {k: v for k, v in collection.items() if k != "features"}
    )
    transformed["features"] = [
        transform_feature(feature, fn) if isinstance(feature, dict) else feature
        for feature in collection["features"]
    ]
    return transformed
