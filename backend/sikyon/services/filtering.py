"""Attribute filtering over feature collections.

Filters are a mapping of property name to constraint. A feature is kept
when it satisfies every constraint; the constraint's type decides how it
is matched:

- empty string or None: ignored, always satisfied,
- list or tuple (multi-select): the property equals one of the values,
- string (free text): case-insensitive substring of the property's text,
- anything else: strict equality.

Example:
    >>> from sikyon.services import filtering
    >>> filtering.filter_features(
    ...     collection, {"period": ["Classical", "Roman"], "type": "ware"}
    ... )
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sikyon.geo import geometry

if TYPE_CHECKING:
    from collections.abc import Iterable

_MISSING = object()


def _strict_equals(left: Any, right: Any) -> bool:
    """Equality that never treats booleans as numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, numbers.Number) != isinstance(right, numbers.Number):
        return False
    return left == right


def _text(value: Any) -> str:
    """Render a property value the way the map client displays it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _text(item) for item in value)
    return str(value)


def is_empty_constraint(value: Any) -> bool:
    return value is None or value == ""


def matches_constraint(properties: Mapping[str, Any], key: str, value: Any) -> bool:
    """Check one property constraint against a feature's properties."""
    if is_empty_constraint(value):
        return True

    prop = properties.get(key, _MISSING)

    if isinstance(value, (list, tuple)):
        if prop is _MISSING:
            return False
        return any(_strict_equals(prop, option) for option in value)

    if isinstance(value, str):
        if prop is _MISSING or prop is None:
            return False
        return value.lower() in _text(prop).lower()

    if prop is _MISSING:
        return False
    return _strict_equals(prop, value)


def feature_matches(
    feature: geometry.Feature, filters: Mapping[str, Any]
) -> bool:
    properties = feature.get("properties") or {}
    return all(
        matches_constraint(properties, key, value)
        for key, value in filters.items()
    )


def filter_features(
    collection: geometry.FeatureCollection | None,
    filters: Mapping[str, Any],
) -> geometry.FeatureCollection:
    """Return a new FeatureCollection with the features matching all filters.

    Args:
        collection: Source collection; None is treated as empty.
        filters: Property name to constraint mapping.

    Returns:
        A new FeatureCollection preserving the source order and any
        collection-level members.
    """
    if collection is None:
        return geometry.empty_collection()

    features: Iterable[geometry.Feature] = collection.get("features") or []
    filtered = {k: v for k, v in collection.items() if k != "features"}
    filtered["type"] = "FeatureCollection"
    filtered["features"] = [
        feature for feature in features if feature_matches(feature, filters)
    ]
    return filtered  # type: ignore[return-value]


def get_feature_by_id(
    collection: geometry.FeatureCollection | None,
    feature_id: Any,
) -> geometry.Feature | None:
    """Return the first feature whose ``properties.id`` or ``id`` matches.

    Args:
        collection: Collection to search; None finds nothing.
        feature_id: Identifier to look for.

    Returns:
        The matching feature, or None.
    """
    if collection is None:
        return None

    for feature in collection.get("features") or []:
        properties = feature.get("properties") or {}
        if _strict_equals(properties.get("id", _MISSING), feature_id):
            return feature
        if _strict_equals(feature.get("id", _MISSING), feature_id):
            return feature
    return None
