"""
Region and parcel geometry routes.
"""
from typing import Awaitable, Callable, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from uldk_client.errors import NotFoundError, UldkError
from uldk_client.models import GeometryListResponse, GeometryRequest
from uldk_client.services.lookup import UldkLookup, get_lookup

router = APIRouter(prefix="/api", tags=["Geometry"])


async def _geometry_response(
    fetch: Callable[[str], Awaitable[List[Dict]]],
    request: GeometryRequest,
    entity_id: str,
) -> GeometryListResponse:
    try:
        geometries = await fetch(entity_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UldkError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return GeometryListResponse(
        id=entity_id,
        request=request,
        count=len(geometries),
        geometries=geometries,
    )


@router.get("/regions/{region_id}/geometry", response_model=GeometryListResponse)
async def get_region_geometry(
    region_id: str,
    lookup: UldkLookup = Depends(get_lookup),
):
    """
    Geometry of a precinct (region) by its identifier, e.g. 141201_1.0001.
    Coordinates are GeoJSON [lon, lat] in EPSG:4326.
    """
    return await _geometry_response(lookup.fetch_region_geometry, GeometryRequest.REGION, region_id)


@router.get("/parcels/{parcel_id:path}/geometry", response_model=GeometryListResponse)
async def get_parcel_geometry(
    parcel_id: str,
    lookup: UldkLookup = Depends(get_lookup),
):
    """Geometry of a parcel by its full identifier, e.g. 141201_1.0001.1867/2."""
    return await _geometry_response(lookup.fetch_parcel_geometry, GeometryRequest.PARCEL, parcel_id)
