"""Survey data service: the query surface used by the HTTP layer.

SurveyDataService owns the layer store, the layer catalog and the loaded
layer configuration. One instance is built at application startup and
shared by every request; both caches live on it rather than at module
level.

Example:
    >>> service = SurveyDataService.from_settings(get_settings())
    >>> service.list_layers()
    >>> service.filter_layer("pottery", {"period": ["Roman"]})
    >>> service.get_feature("pottery", "pot-001")
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from sikyon.core import layer_config
from sikyon.services import filtering, layer_catalog, layer_store

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sikyon import models
    from sikyon.core import config
    from sikyon.geo import geometry


class SurveyDataService:
    """Long-lived holder of the layer caches.

    Attributes:
        settings: Application settings.
        layer_cfg: Layer configuration, immutable for the process lifetime.
        store: Per-layer FeatureCollection store.
        catalog: Layer descriptor catalog backed by ``store``.
    """

    def __init__(
        self,
        settings: config.Settings,
        layer_cfg: layer_config.LayerConfig,
        store: layer_store.LayerStoreProtocol | None = None,
    ) -> None:
        self.settings = settings
        self.layer_cfg = layer_cfg
        self.store = store or layer_store.LayerStore(settings)
        self.catalog = layer_catalog.LayerCatalog(settings, self.store, layer_cfg)

    @classmethod
    def from_settings(cls, settings: config.Settings) -> SurveyDataService:
        """Build the service, loading the layer configuration once.

        Args:
            settings: Application settings; ``layer_config_file`` selects a
                custom LayerConfig.

        Returns:
            A ready service with empty caches.
        """
        return cls(settings, layer_config.load_layer_config(settings.layer_config_file))

    def list_layers(self) -> list[models.LayerDescriptor]:
        return self.catalog.list_layers()

    def _cached_layer(self, layer_id: str) -> geometry.FeatureCollection | None:
        stored = self.store.entry(layer_id)
        if stored.source == "empty":
            return None
        return stored.collection

    def get_layer(self, layer_id: str) -> geometry.FeatureCollection | None:
        """Return a copy of a layer, or None if nothing backs it."""
        return copy.deepcopy(self._cached_layer(layer_id))

    def filter_layer(
        self, layer_id: str, filters: Mapping[str, Any]
    ) -> geometry.FeatureCollection:
        """Filter a layer; unknown layers yield an empty collection.

        The matching features are copies, so callers may edit them freely.
        """
        return copy.deepcopy(
            filtering.filter_features(self._cached_layer(layer_id), filters)
        )

    def get_feature(
        self, layer_id: str, feature_id: Any
    ) -> geometry.Feature | None:
        return copy.deepcopy(
            filtering.get_feature_by_id(self._cached_layer(layer_id), feature_id)
        )
