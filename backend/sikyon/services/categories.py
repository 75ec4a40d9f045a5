"""Category index extraction for filter dropdowns."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sikyon import models
    from sikyon.geo import geometry


def build_categories(
    collection: geometry.FeatureCollection,
) -> models.CategoryIndex:
    """Collect the distinct string values of every property in a layer.

    Only non-empty strings are indexed; numbers, booleans, nulls and arrays
    are skipped, so a property that never holds a string has no entry.

    Args:
        collection: FeatureCollection to scan.

    Returns:
        Mapping of property name to its values sorted ascending.
    """
    values: dict[str, set[str]] = {}
    for feature in collection.get("features") or []:
        properties = (feature or {}).get("properties") or {}
        for key, value in properties.items():
            if isinstance(value, str) and value:
                values.setdefault(key, set()).add(value)

    return {key: sorted(found) for key, found in values.items()}
