"""Data models for survey layer descriptors.

A LayerDescriptor is what the map client receives when it asks for the
list of layers: identity and display metadata, the dominant geometry type,
the number of features and the category index used to fill filter
dropdowns.

Example:
    Creating a descriptor for a point layer:
        >>> from sikyon.models import LayerDescriptor
        >>> layer = LayerDescriptor(
        ...     id="pottery",
        ...     name="Pottery Finds",
        ...     description="Ceramic artifacts and sherds",
        ...     type="Point",
        ...     feature_count=2,
        ...     visible=False,
        ...     allow_filtering=False,
        ...     categories={"period": ["Classical", "Roman"]},
        ... )
        >>> layer.to_json()["featureCount"]
        2
"""

from __future__ import annotations

import dataclasses
from typing import Any

CategoryIndex = dict[str, list[str]]


@dataclasses.dataclass(frozen=True)
class LayerDescriptor:
    """Represents a survey layer the map client can display.

    Attributes:
        id: Layer identifier, the layer file name without extension.
        name: Human-readable layer name.
        description: Short description shown next to the layer toggle.
        type: Geometry type of the first feature, or "Unknown".
        feature_count: Number of features in the layer.
        visible: Whether the layer is switched on when the map loads.
        allow_filtering: Whether the client may offer attribute filters.
        categories: Distinct string values per property name.
    """

    id: str
    name: str
    description: str
    type: str
    feature_count: int
    visible: bool
    allow_filtering: bool
    categories: CategoryIndex = dataclasses.field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        """Serialize using the camelCase keys the map client expects."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "featureCount": self.feature_count,
            "categories": {k: list(v) for k, v in self.categories.items()},
            "visible": self.visible,
            "allowFiltering": self.allow_filtering,
            "description": self.description,
        }
