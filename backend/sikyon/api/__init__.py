"""API router subpackage for the survey backend.

Submodules:
    - data: Endpoints for listing layers, fetching layer GeoJSON, filtering
      layers by attributes and looking up single features.
"""
