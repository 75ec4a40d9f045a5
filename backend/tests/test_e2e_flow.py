"""End-to-end tests for the survey data flow.

This module drives the HTTP surface against a real data directory to
verify that:
    - Grid coordinates in layer files come back as WGS84,
    - Reprojected output is stable when projected again,
    - Missing layer files fall back to the demonstration data,
    - Feature lookup works on the demonstration data,
    - Catalog configuration, filtering and caching compose correctly.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fastapi import testclient

from sikyon import main
from sikyon.core import config
from sikyon.geo import projection

if TYPE_CHECKING:
    import pathlib


def test_grid_layer_is_served_in_wgs84(
    tmp_path: pathlib.Path,
    write_layer: Callable[[str, Any], pathlib.Path],
) -> None:
    write_layer(
        "architectural-features-point.geojson",
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": 1,
                    "geometry": {"type": "Point", "coordinates": [500000, 4207000]},
                    "properties": {"id": "afp-1", "type": "Column base"},
                },
                {
                    "type": "Feature",
                    "id": 2,
                    "geometry": {"type": "Point", "coordinates": [500050, 4207050]},
                    "properties": {"id": "afp-2", "type": "Threshold"},
                },
            ],
        },
    )
    app = main.create_app(config.Settings(data_dir=tmp_path / "data"))
    client = testclient.TestClient(app)

    layers = client.get("/api/data/layers").json()
    assert [layer["id"] for layer in layers] == ["architectural-features-point"]
    assert layers[0]["allowFiltering"] is True
    assert layers[0]["categories"] == {
        "id": ["afp-1", "afp-2"],
        "type": ["Column base", "Threshold"],
    }

    layer = client.get("/api/data/layer/architectural-features-point").json()
    lon, lat = layer["features"][0]["geometry"]["coordinates"]
    assert abs(lon - 24.0) < 0.01
    assert abs(lat - 38.0) < 0.05
    assert projection.transform_point([lon, lat]) == [lon, lat]

    filtered = client.post(
        "/api/data/filter",
        json={
            "layerId": "architectural-features-point",
            "filters": {"type": ["Threshold"], "id": ""},
        },
    ).json()
    assert [f["properties"]["id"] for f in filtered["features"]] == ["afp-2"]

    feature = client.get(
        "/api/data/feature/architectural-features-point/afp-1"
    ).json()
    assert feature["id"] == 1


def test_missing_pottery_file_serves_demonstration_collection(
    tmp_path: pathlib.Path,
) -> None:
    (tmp_path / "data").mkdir()
    client = testclient.TestClient(
        main.create_app(config.Settings(data_dir=tmp_path / "data"))
    )

    pottery = client.get("/api/data/layer/pottery").json()
    properties = [f["properties"] for f in pottery["features"]]
    assert len(properties) == 2
    assert properties[0]["type"] == "Fine Ware"
    assert properties[0]["period"] == "Classical"
    assert properties[1]["type"] == "Storage"
    assert properties[1]["period"] == "Roman"

    feature = client.get("/api/data/feature/pottery/pot-001").json()
    assert feature["properties"]["id"] == "pot-001"


def test_layer_cache_survives_file_changes(
    tmp_path: pathlib.Path,
    write_layer: Callable[[str, Any], pathlib.Path],
) -> None:
    """Data is read once per process; edits need a restart."""
    collection = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [500000, 4207000]},
                "properties": {"id": "c1"},
            }
        ],
    }
    path = write_layer("cliffs.geojson", collection)
    client = testclient.TestClient(
        main.create_app(config.Settings(data_dir=tmp_path / "data"))
    )
    assert len(client.get("/api/data/layer/cliffs").json()["features"]) == 1

    path.write_text(json.dumps({"type": "FeatureCollection", "features": []}))
    assert len(client.get("/api/data/layer/cliffs").json()["features"]) == 1
    assert client.get("/api/data/layers").json()[0]["featureCount"] == 1
