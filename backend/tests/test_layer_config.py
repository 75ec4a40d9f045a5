"""Tests for layer configuration loading and descriptor resolution rules."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pydantic
import pytest

from sikyon.core import layer_config

if TYPE_CHECKING:
    import pathlib


def _points(count: int) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [22.7, 38.0]},
                "properties": {},
            }
            for _ in range(count)
        ],
    }


@pytest.mark.parametrize(
    ("layer_id", "expected"),
    [
        ("survey-tracts", "Survey Tracts"),
        ("architectural_features_line", "Architectural Features Line"),
        ("pottery", "Pottery"),
        ("geophysics-interpretation_v2", "Geophysics Interpretation V2"),
    ],
)
def test_format_layer_name(layer_id: str, expected: str) -> None:
    assert layer_config.format_layer_name(layer_id) == expected


def test_default_config_matches_production_settings() -> None:
    cfg = layer_config.DEFAULT_LAYER_CONFIG
    assert layer_config.is_excluded("iso-2m", cfg)
    assert layer_config.is_excluded("ISO_2m", cfg)
    assert not layer_config.is_excluded("Iso-2m", cfg)
    assert cfg.layer_order[0] == "survey-tracts"
    assert cfg.layer_order[-1] == "coins"
    assert "architectural-features-line" not in cfg.no_filter_layers
    assert cfg.layer_settings["squares"].name == "Survey Squares"


def test_order_key_puts_unlisted_layers_last() -> None:
    cfg = layer_config.LayerConfig(layer_order=("b", "a"))
    discovered = ["a", "b", "c", "d"]
    ordered = sorted(discovered, key=lambda i: layer_config.order_key(i, cfg))
    assert ordered == ["b", "a", "c", "d"]


def test_resolve_descriptor_with_settings() -> None:
    descriptor = layer_config.resolve_descriptor(
        "squares",
        _points(2),
        {"name": ["A-12"]},
        layer_config.DEFAULT_LAYER_CONFIG,
    )
    assert descriptor.name == "Survey Squares"
    assert descriptor.description == "Grid square boundaries"
    assert descriptor.visible is True
    assert descriptor.allow_filtering is False
    assert descriptor.feature_count == 2
    assert descriptor.type == "Point"
    assert descriptor.categories == {"name": ["A-12"]}


def test_resolve_descriptor_defaults() -> None:
    """Unconfigured layers are hidden, filterable and title-cased."""
    descriptor = layer_config.resolve_descriptor(
        "kiln_sites", _points(0), {}, layer_config.LayerConfig()
    )
    assert descriptor.name == "Kiln Sites"
    assert descriptor.description == "Kiln Sites"
    assert descriptor.visible is False
    assert descriptor.allow_filtering is True
    assert descriptor.feature_count == 0
    assert descriptor.type == "Unknown"


def test_partial_settings_fall_back_per_field() -> None:
    cfg = layer_config.LayerConfig(
        layer_settings={"kilns": layer_config.LayerSettings(description="Kilns")}
    )
    descriptor = layer_config.resolve_descriptor("kilns", _points(1), {}, cfg)
    assert descriptor.name == "Kilns"
    assert descriptor.description == "Kilns"
    assert descriptor.visible is False


def test_load_layer_config_from_json(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "layers.json"
    path.write_text(
        json.dumps(
            {
                "excludedLayers": ["scratch"],
                "layerOrder": ["b", "a"],
                "noFilterLayers": ["a"],
                "layerSettings": {
                    "a": {"defaultVisible": True, "name": "Layer A"}
                },
            }
        ),
        encoding="utf-8",
    )
    cfg = layer_config.load_layer_config(path)
    assert cfg.excluded_layers == frozenset({"scratch"})
    assert cfg.layer_order == ("b", "a")
    assert cfg.layer_settings["a"].default_visible is True
    assert cfg.layer_settings["a"].description is None


def test_load_layer_config_default() -> None:
    assert (
        layer_config.load_layer_config(None)
        is layer_config.DEFAULT_LAYER_CONFIG
    )


def test_load_layer_config_invalid(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "layers.json"
    path.write_text('{"layerOrder": 5}', encoding="utf-8")
    with pytest.raises(pydantic.ValidationError):
        layer_config.load_layer_config(path)


def test_layer_config_is_immutable() -> None:
    with pytest.raises(pydantic.ValidationError):
        layer_config.DEFAULT_LAYER_CONFIG.layer_order = ()  # type: ignore[misc]
