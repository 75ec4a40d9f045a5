"""Survey layer query endpoints.

These routes are thin glue over SurveyDataService: they fetch the service
from the application state, call it, and translate absent results into
HTTP 404 responses. All geometries are returned as WGS84 GeoJSON.

Example:
    List layers for the layer panel:
        >>> response = client.get("/api/data/layers")
        >>> # Returns: [{"id": "survey-tracts", "name": "Survey Tracts",
        >>> #            "type": "Polygon", "featureCount": 12, ...}, ...]

    Filter a layer:
        >>> response = client.post(
        ...     "/api/data/filter",
        ...     json={"layerId": "pottery", "filters": {"period": ["Roman"]}},
        ... )
        >>> # Returns a FeatureCollection with the matching features
"""

from typing import Any

import fastapi
import pydantic

from sikyon.services import survey

router = fastapi.APIRouter(prefix="/api/data", tags=["data"])


class FilterRequest(pydantic.BaseModel):
    """Body of a filter request.

    Both fields are optional at the schema level so that a missing field is
    reported with the same 400 response as an empty one.
    """

    model_config = pydantic.ConfigDict(populate_by_name=True)

    layer_id: str | None = pydantic.Field(default=None, alias="layerId")
    filters: dict[str, Any] | None = None


def _get_service(request: fastapi.Request) -> survey.SurveyDataService:
    """Resolve the survey data service created at application startup.

    Args:
        request: Incoming request (injected by FastAPI).

    Returns:
        The SurveyDataService stored on ``app.state``.
    """
    return request.app.state.survey


@router.get("/layers")
async def list_layers(
    service: survey.SurveyDataService = fastapi.Depends(_get_service),  # noqa: B008
) -> list[dict[str, Any]]:
    """List all displayable layers in stacking order, bottom layer first."""
    return [layer.to_json() for layer in service.list_layers()]


@router.get("/layer/{layer_id}")
async def get_layer_data(
    layer_id: str,
    service: survey.SurveyDataService = fastapi.Depends(_get_service),  # noqa: B008
) -> dict[str, Any]:
    """Return the WGS84 FeatureCollection of a layer.

    Raises:
        HTTPException: If nothing backs the layer (404 status code).
    """
    data = service.get_layer(layer_id)
    if data is None:
        raise fastapi.HTTPException(status_code=404, detail="Layer not found")
    return data


@router.post("/filter")
async def filter_data(
    body: FilterRequest,
    service: survey.SurveyDataService = fastapi.Depends(_get_service),  # noqa: B008
) -> dict[str, Any]:
    """Filter a layer by attribute constraints.

    An unknown layer yields an empty FeatureCollection rather than a 404.

    Raises:
        HTTPException: If ``layerId`` or ``filters`` is missing (400).
    """
    if not body.layer_id or body.filters is None:
        raise fastapi.HTTPException(
            status_code=400,
            detail="layerId and filters are required",
        )
    return service.filter_layer(body.layer_id, body.filters)


@router.get("/feature/{layer_id}/{feature_id}")
async def get_feature_details(
    layer_id: str,
    feature_id: str,
    service: survey.SurveyDataService = fastapi.Depends(_get_service),  # noqa: B008
) -> dict[str, Any]:
    """Return a single feature by ``properties.id`` or top-level ``id``.

    Raises:
        HTTPException: If the layer has no such feature (404).
    """
    feature = service.get_feature(layer_id, feature_id)
    if feature is None:
        raise fastapi.HTTPException(status_code=404, detail="Feature not found")
    return feature
