"""
Administrative unit routes backing the cascading selector.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from uldk_client.models import FetchState, Option
from uldk_client.services.lookup import UldkLookup, get_lookup

router = APIRouter(prefix="/api", tags=["Administrative"])


def _options_or_502(options: Optional[List[Option]], lookup: UldkLookup) -> List[Option]:
    if options is None:
        raise HTTPException(status_code=502, detail=lookup.error or "ULDK request failed")
    return options


@router.get("/voivodeships", response_model=List[Option])
async def get_voivodeships(lookup: UldkLookup = Depends(get_lookup)):
    """Voivodeships loaded at startup."""
    return lookup.voivodeships


@router.get("/districts", response_model=List[Option])
async def get_districts(
    teryt: str = Query(..., description="Voivodeship TERYT code"),
    lookup: UldkLookup = Depends(get_lookup),
):
    return _options_or_502(await lookup.fetch_districts(teryt), lookup)


@router.get("/tenants", response_model=List[Option])
async def get_tenants(
    teryt: str = Query(..., description="District TERYT code"),
    lookup: UldkLookup = Depends(get_lookup),
):
    return _options_or_502(await lookup.fetch_tenants(teryt), lookup)


@router.get("/precincts", response_model=List[Option])
async def get_precincts(
    teryt: str = Query(..., description="Tenant TERYT code"),
    lookup: UldkLookup = Depends(get_lookup),
):
    return _options_or_502(await lookup.fetch_precincts(teryt), lookup)


@router.get("/state", response_model=FetchState)
async def get_state(lookup: UldkLookup = Depends(get_lookup)):
    """Everything currently cached, including the last error message."""
    return lookup.state
