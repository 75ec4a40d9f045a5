"""Layer discovery and descriptor building.

The catalog scans the data directory for layer files, drops excluded
identifiers, loads each layer through the store (so categories and counts
reflect the reprojected data), applies the configured display settings and
orders the result for the map's layer stack.

If the directory is missing or unreadable, or nothing usable is found,
the catalog is built from the demonstration layers instead, so the map
never starts empty. The result is computed once and reused until restart.

Example:
    >>> catalog = LayerCatalog(settings, LayerStore(settings), DEFAULT_LAYER_CONFIG)
    >>> [layer.id for layer in catalog.list_layers()]
    ['survey-tracts', 'squares', 'cliffs', 'architecture', 'pottery', 'coins']
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from sikyon.core import layer_config
from sikyon.services import categories, samples

if TYPE_CHECKING:
    from sikyon import models
    from sikyon.core import config
    from sikyon.geo import geometry
    from sikyon.services import layer_store


class LayerCatalog:
    """Builds and caches the ordered list of layer descriptors."""

    def __init__(
        self,
        settings: config.Settings,
        store: layer_store.LayerStoreProtocol,
        layer_cfg: layer_config.LayerConfig,
    ) -> None:
        self.settings = settings
        self.store = store
        self.layer_cfg = layer_cfg
        self._layers: tuple[models.LayerDescriptor, ...] | None = None

    def list_layers(self) -> list[models.LayerDescriptor]:
        """Return every displayable layer in stacking order.

        Returns:
            Layer descriptors, bottom layer first. Never empty.
        """
        if self._layers is None:
            self._layers = tuple(self._build())
        return list(self._layers)

    def discover_layer_ids(self) -> list[str] | None:
        """List layer identifiers found in the data directory.

        Identifiers are file names with the layer suffix stripped, in sorted
        file name order, without duplicates.

        Returns:
            The identifiers, or None when the directory cannot be read.
        """
        data_dir = self.settings.data_dir
        try:
            names = sorted(
                path.name for path in data_dir.iterdir() if path.is_file()
            )
        except OSError as exc:
            logger.bind(event="layer_dir_unavailable").warning(
                "Data directory {} unavailable: {}", data_dir, exc
            )
            return None

        layer_ids: list[str] = []
        for name in names:
            for suffix in self.settings.layer_file_suffixes:
                if name.endswith(suffix) and len(name) > len(suffix):
                    layer_id = name[: -len(suffix)]
                    if layer_id not in layer_ids:
                        layer_ids.append(layer_id)
                    break
        return layer_ids

    def _describe(
        self, layer_id: str, collection: geometry.FeatureCollection
    ) -> models.LayerDescriptor:
        return layer_config.resolve_descriptor(
            layer_id,
            collection,
            categories.build_categories(collection),
            self.layer_cfg,
        )

    def _build(self) -> list[models.LayerDescriptor]:
        layer_ids = self.discover_layer_ids()
        if layer_ids is None:
            return self._demonstration_layers()

        descriptors: list[models.LayerDescriptor] = []
        for layer_id in layer_ids:
            if layer_config.is_excluded(layer_id, self.layer_cfg):
                logger.debug("Skipping excluded layer {}", layer_id)
                continue
            stored = self.store.entry(layer_id)
            if stored.source == "empty":
                logger.bind(event="layer_skipped", layer=layer_id).warning(
                    "Layer {} has no usable data", layer_id
                )
                continue
            descriptors.append(self._describe(layer_id, stored.collection))

        if not descriptors:
            return self._demonstration_layers()

        logger.info("Layer catalog built with {} layers", len(descriptors))
        return self._ordered(descriptors)

    def _demonstration_layers(self) -> list[models.LayerDescriptor]:
        logger.bind(event="catalog_fallback").warning(
            "No layer files found in {}; using demonstration layers",
            self.settings.data_dir,
        )
        descriptors = []
        for layer_id in samples.SAMPLE_LAYER_IDS:
            if layer_config.is_excluded(layer_id, self.layer_cfg):
                continue
            collection = samples.sample_collection(layer_id)
            if collection is not None:
                descriptors.append(self._describe(layer_id, collection))
        return self._ordered(descriptors)

    def _ordered(
        self, descriptors: list[models.LayerDescriptor]
    ) -> list[models.LayerDescriptor]:
        return sorted(
            descriptors,
            key=lambda layer: layer_config.order_key(layer.id, self.layer_cfg),
        )
