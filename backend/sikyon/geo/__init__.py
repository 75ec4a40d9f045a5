"""Coordinate reprojection and GeoJSON geometry traversal."""
