"""Per-layer FeatureCollection loading and caching.

Layer files hold a single GeoJSON FeatureCollection in Greek Grid
coordinates. The store reads a file the first time its layer is asked
for, reprojects it to WGS84 once, and keeps the result for the rest of
the process. Reads never raise: a missing or malformed file is replaced
by the built-in demonstration collection for known layers, and by an
empty collection otherwise.

Example:
    >>> from sikyon.core.config import Settings
    >>> store = LayerStore(Settings(data_dir=Path("public/data")))
    >>> pottery = store.get("pottery")
    >>> store.entry("pottery").source
    'file'
"""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING, Literal, Protocol

from loguru import logger

from sikyon.geo import geometry
from sikyon.services import samples

if TYPE_CHECKING:
    import pathlib

    from sikyon.core import config

LayerSource = Literal["file", "sample", "empty"]


class MalformedLayerError(ValueError):
    """Raised internally when a layer file is not a FeatureCollection."""


@dataclasses.dataclass(frozen=True)
class StoredLayer:
    """A layer's features together with where they came from.

    Attributes:
        layer_id: Layer identifier.
        collection: Reprojected FeatureCollection.
        source: "file" when read from disk, "sample" for the demonstration
            data, "empty" when nothing was available.
    """

    layer_id: str
    collection: geometry.FeatureCollection
    source: LayerSource


class LayerStoreProtocol(Protocol):
    """Protocol interface for looking up layer feature collections."""

    def entry(self, layer_id: str) -> StoredLayer: ...

    def get(self, layer_id: str) -> geometry.FeatureCollection: ...


def read_layer_file(path: pathlib.Path) -> geometry.FeatureCollection:
    """Parse a layer file and reproject it to WGS84.

    Args:
        path: GeoJSON file holding one FeatureCollection.

    Returns:
        The reprojected FeatureCollection.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not JSON or not a FeatureCollection,
            if a feature's properties or geometry is not an object, or if
            its geometries are nested incorrectly.
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not geometry.is_feature_collection(raw):
        raise MalformedLayerError(f"{path.name} is not a FeatureCollection")
    for index, feature in enumerate(raw["features"]):
        if not isinstance(feature, dict):
            raise MalformedLayerError(f"{path.name} has non-object features")
        for member in ("properties", "geometry"):
            value = feature.get(member)
            if value is not None and not isinstance(value, dict):
                raise MalformedLayerError(
                    f"{path.name}: feature {index} has a non-object {member}"
                )
    try:
        return geometry.transform_feature_collection(raw)
    except (TypeError, AttributeError) as exc:
        raise MalformedLayerError(f"{path.name}: {exc}") from exc


class LayerStore(LayerStoreProtocol):
    """File-backed layer store with a process-lifetime cache.

    Only layers read successfully from disk are cached. Fallback results
    are rebuilt on every miss, which keeps lookups of arbitrary unknown
    identifiers from growing the cache.
    """

    def __init__(self, settings: config.Settings) -> None:
        """Initialize an empty store reading from ``settings.data_dir``.

        Args:
            settings: Application settings with the data directory.
        """
        self.settings = settings
        self._cache: dict[str, StoredLayer] = {}

    def entry(self, layer_id: str) -> StoredLayer:
        """Return the layer with its source, loading it on first access.

        Concurrent first loads of the same layer may both read the file;
        the results are identical and the cache slot is written with a
        single assignment.

        Args:
            layer_id: Layer identifier.

        Returns:
            StoredLayer for ``layer_id``.
        """
        cached = self._cache.get(layer_id)
        if cached is not None:
            return cached

        path = self.settings.layer_path(layer_id)
        if path is None:
            return self._fallback(layer_id, "no layer file")

        try:
            collection = read_layer_file(path)
        except (OSError, ValueError) as exc:
            return self._fallback(layer_id, str(exc))

        stored = StoredLayer(layer_id, collection, "file")
        self._cache[layer_id] = stored
        logger.debug(
            "Loaded layer {} ({} features)",
            layer_id,
            len(collection["features"]),
        )
        return stored

    def get(self, layer_id: str) -> geometry.FeatureCollection:
        """Return the reprojected FeatureCollection for ``layer_id``."""
        return self.entry(layer_id).collection

    def cached_ids(self) -> list[str]:
        return list(self._cache)

    @staticmethod
    def _fallback(layer_id: str, reason: str) -> StoredLayer:
        sample = samples.sample_collection(layer_id)
        if sample is not None:
            logger.bind(event="layer_read_failed", layer=layer_id).warning(
                "Error loading layer {}: {}; serving demonstration data",
                layer_id,
                reason,
            )
            return StoredLayer(layer_id, sample, "sample")

        logger.bind(event="layer_read_failed", layer=layer_id).warning(
            "Error loading layer {}: {}; serving an empty collection",
            layer_id,
            reason,
        )
        return StoredLayer(layer_id, geometry.empty_collection(), "empty")
