"""Sikyon survey backend: archaeological survey layers served as GeoJSON.

This package serves the survey's point, line and polygon layers to the map
client. Layer files are recorded in the Greek Grid (EPSG:2100) and are
reprojected to WGS84 when first loaded.

- Discovers layer files and applies the static layer configuration
  (exclusions, stacking order, filterability, display names)
- Builds per-layer category indexes that feed the client's filter dropdowns
- Evaluates attribute filters and feature lookups against cached layers
- Falls back to built-in demonstration layers when no data is available

See the module docstrings under ``sikyon.geo`` and ``sikyon.services`` for
details.
"""
