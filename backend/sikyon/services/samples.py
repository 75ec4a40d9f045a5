"""Built-in demonstration layers around Sikyon.

When a layer file is missing or unreadable, the store substitutes one of
these small collections so the map still has something to show. They are
already in WGS84 and are never reprojected. Every call returns a fresh
copy; the module-level templates are never handed out.
"""

from __future__ import annotations

import copy

from sikyon.geo import geometry

# Sikyon, approximately 37.99N 22.72E
SIKYON_CENTER = (22.72, 37.99)


def _offset(dx: float, dy: float) -> list[float]:
    return [SIKYON_CENTER[0] + dx, SIKYON_CENTER[1] + dy]


def _square(dx: float, dy: float, size: float) -> list[list[float]]:
    return [
        _offset(dx, dy),
        _offset(dx + size, dy),
        _offset(dx + size, dy + size),
        _offset(dx, dy + size),
        _offset(dx, dy),
    ]


def _feature(
    feature_id: str,
    shape: geometry.Geometry,
    **properties: str,
) -> geometry.Feature:
    return {
        "type": "Feature",
        "id": feature_id,
        "geometry": shape,
        "properties": {"id": feature_id, **properties},
    }


_SAMPLES: dict[str, list[geometry.Feature]] = {
    "pottery": [
        _feature(
            "pot-001",
            {"type": "Point", "coordinates": _offset(0.01, 0.01)},
            type="Fine Ware",
            period="Classical",
            description="Red-figure pottery fragment",
            square="A-12",
        ),
        _feature(
            "pot-002",
            {"type": "Point", "coordinates": _offset(-0.01, 0.005)},
            type="Storage",
            period="Roman",
            description="Amphora handle",
            square="B-8",
        ),
    ],
    "architecture": [
        _feature(
            "arch-001",
            {"type": "Polygon", "coordinates": [_square(0, 0, 0.002)]},
            type="Building",
            period="Hellenistic",
            description="Foundation walls",
            square="C-15",
        ),
    ],
    "coins": [
        _feature(
            "coin-001",
            {"type": "Point", "coordinates": _offset(0.005, -0.005)},
            period="Roman",
            description="Bronze coin, Emperor Hadrian",
            square="D-20",
        ),
    ],
    "survey-tracts": [
        _feature(
            "tract-001",
            {"type": "Polygon", "coordinates": [_square(-0.015, -0.01, 0.03)]},
            name="Tract 1",
            description="Lower plateau survey tract",
        ),
    ],
    "squares": [
        _feature(
            "A-12",
            {"type": "Polygon", "coordinates": [_square(0.01, 0.01, 0.001)]},
            name="A-12",
            tract="tract-001",
        ),
        _feature(
            "B-8",
            {"type": "Polygon", "coordinates": [_square(-0.01, 0.005, 0.001)]},
            name="B-8",
            tract="tract-001",
        ),
    ],
    "cliffs": [
        _feature(
            "cliff-001",
            {
                "type": "LineString",
                "coordinates": [
                    _offset(-0.02, 0.02),
                    _offset(0.0, 0.022),
                    _offset(0.02, 0.018),
                ],
            },
            description="Plateau escarpment, north edge",
        ),
    ],
}

SAMPLE_LAYER_IDS: tuple[str, ...] = tuple(_SAMPLES)


def has_sample(layer_id: str) -> bool:
    return layer_id in _SAMPLES


def sample_collection(layer_id: str) -> geometry.FeatureCollection | None:
    """Return a copy of the demonstration collection for ``layer_id``.

    Args:
        layer_id: Layer identifier.

    Returns:
        A new FeatureCollection, or None when no sample exists.
    """
    features = _SAMPLES.get(layer_id)
    if features is None:
        return None
    return {"type": "FeatureCollection", "features": copy.deepcopy(features)}
