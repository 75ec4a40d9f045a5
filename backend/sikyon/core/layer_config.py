"""Layer display configuration and descriptor resolution rules.

The LayerConfig controls which layers the catalog shows, the order in
which the map stacks them (bottom to top), which layers offer attribute
filters, and per-layer display settings. It is loaded once at startup
and never changes while the process runs.

The functions at the bottom of this module are the only place where the
default-resolution policy lives:

- visibility comes from ``defaultVisible`` and is off when unset,
- filtering is allowed unless the layer is listed in ``noFilterLayers``,
- name and description fall back to the title-cased identifier,
- layers missing from ``layerOrder`` sort after all listed layers.

Example:
    Load a custom configuration file:
        >>> from sikyon.core import layer_config
        >>> cfg = layer_config.load_layer_config(Path("layers.json"))
        >>> layer_config.is_excluded("iso-2m", cfg)
        True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pydantic

from sikyon import models

if TYPE_CHECKING:
    import pathlib

    from sikyon.geo import geometry


class LayerSettings(pydantic.BaseModel):
    """Display settings for a single layer. Every field is optional."""

    model_config = pydantic.ConfigDict(frozen=True, populate_by_name=True)

    default_visible: bool | None = pydantic.Field(
        default=None, alias="defaultVisible"
    )
    name: str | None = None
    description: str | None = None


class LayerConfig(pydantic.BaseModel):
    """Static layer configuration.

    Attributes:
        excluded_layers: Identifiers hidden from the catalog. Matching is
            exact and case-sensitive, so every spelling must be listed.
        layer_order: Display order, bottom layer first.
        no_filter_layers: Identifiers for which filtering is disabled.
        layer_settings: Per-layer display settings keyed by identifier.
    """

    model_config = pydantic.ConfigDict(frozen=True, populate_by_name=True)

    excluded_layers: frozenset[str] = pydantic.Field(
        default=frozenset(), alias="excludedLayers"
    )
    layer_order: tuple[str, ...] = pydantic.Field(
        default=(), alias="layerOrder"
    )
    no_filter_layers: frozenset[str] = pydantic.Field(
        default=frozenset(), alias="noFilterLayers"
    )
    layer_settings: dict[str, LayerSettings] = pydantic.Field(
        default_factory=dict, alias="layerSettings"
    )


DEFAULT_LAYER_CONFIG = LayerConfig(
    excluded_layers=frozenset({"iso-2m", "iso_2m", "ISO-2m", "ISO_2m"}),
    layer_order=(
        "survey-tracts",
        "squares",
        "cliffs",
        "geophysics-interpretation",
        "architectural-features-line",
        "architectural-features-point",
        "architecture",
        "pottery",
        "coins",
    ),
    no_filter_layers=frozenset(
        {
            "survey-tracts",
            "squares",
            "cliffs",
            "pottery",
            "coins",
            "architecture",
        }
    ),
    layer_settings={
        "survey-tracts": LayerSettings(
            default_visible=True,
            name="Survey Tracts",
            description="Survey area boundaries",
        ),
        "squares": LayerSettings(
            default_visible=True,
            name="Survey Squares",
            description="Grid square boundaries",
        ),
        "cliffs": LayerSettings(
            default_visible=True,
            name="Cliffs",
            description="Cliff edges and escarpments",
        ),
        "architectural-features-line": LayerSettings(
            default_visible=False,
            name="Architectural Features Line",
            description="Linear architectural features (walls, roads, etc.)",
        ),
        "architectural-features-point": LayerSettings(
            default_visible=False,
            name="Architectural Features Point",
            description="Point architectural features",
        ),
        "geophysics-interpretation": LayerSettings(
            default_visible=False,
            name="Geophysics Interpretation",
            description="Interpreted geophysical anomalies",
        ),
        "architecture": LayerSettings(
            default_visible=False,
            name="Architectural Features",
            description="Buildings, walls, and structures",
        ),
        "pottery": LayerSettings(
            default_visible=False,
            name="Pottery Finds",
            description="Ceramic artifacts and sherds",
        ),
        "coins": LayerSettings(
            default_visible=False,
            name="Coin Finds",
            description="Numismatic finds",
        ),
    },
)


def load_layer_config(path: pathlib.Path | None) -> LayerConfig:
    """Load a LayerConfig from a JSON file.

    Args:
        path: JSON file using the camelCase keys, or None for the built-in
            configuration.

    Returns:
        The parsed configuration.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the file is not a valid LayerConfig.
    """
    if path is None:
        return DEFAULT_LAYER_CONFIG
    return LayerConfig.model_validate_json(path.read_text(encoding="utf-8"))


def format_layer_name(layer_id: str) -> str:
    """Title-case an identifier: ``survey-tracts`` becomes ``Survey Tracts``."""
    return " ".join(
        word[:1].upper() + word[1:]
        for word in layer_id.replace("_", "-").split("-")
    )


def is_excluded(layer_id: str, config: LayerConfig) -> bool:
    return layer_id in config.excluded_layers


def order_key(layer_id: str, config: LayerConfig) -> int:
    """Sort key placing unlisted layers after every listed one."""
    try:
        return config.layer_order.index(layer_id)
    except ValueError:
        return len(config.layer_order)


def geometry_type(collection: geometry.FeatureCollection) -> str:
    """Return the geometry type of the first feature, or "Unknown"."""
    features = collection.get("features") or []
    if not features:
        return "Unknown"
    first = features[0].get("geometry") or {}
    return first.get("type") or "Unknown"


def resolve_descriptor(
    layer_id: str,
    collection: geometry.FeatureCollection,
    categories: models.CategoryIndex,
    config: LayerConfig,
) -> models.LayerDescriptor:
    """Combine a layer's data with its configured display settings.

    Args:
        layer_id: Layer identifier.
        collection: The layer's (reprojected) features.
        categories: Category index built from ``collection``.
        config: Layer configuration.

    Returns:
        LayerDescriptor with every default applied.
    """
    settings = config.layer_settings.get(layer_id) or LayerSettings()
    fallback_name = format_layer_name(layer_id)
    return models.LayerDescriptor(
        id=layer_id,
        name=settings.name or fallback_name,
        description=settings.description or fallback_name,
        type=geometry_type(collection),
        feature_count=len(collection.get("features") or []),
        visible=bool(settings.default_visible),
        allow_filtering=layer_id not in config.no_filter_layers,
        categories=categories,
    )
