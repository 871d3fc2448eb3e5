"""
Cascading ULDK lookups for selector UIs
(voivodeship -> district -> tenant -> precinct) plus geometry by id.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, Request

from uldk_client.errors import UldkError
from uldk_client.models import (
    AdministrativeLevel,
    FetchState,
    GeometryRequest,
    InitialSelection,
    Option,
)
from uldk_client.services.uldk import UldkClient

log = logging.getLogger(__name__)

_STATE_SLOTS = {
    AdministrativeLevel.VOIVODESHIP: "voivodeships",
    AdministrativeLevel.DISTRICT: "districts",
    AdministrativeLevel.TENANT: "tenants",
    AdministrativeLevel.PRECINCT: "precincts",
}


class UldkLookup:
    """
    Owns a FetchState and keeps it in step with ULDK.

    Each level slot is written only by fetches of that level and is replaced
    wholesale. When fetches for one level overlap, only the most recently
    started one is stored in the state; older completions are still returned
    to their callers but leave the slot alone.
    """

    def __init__(
        self,
        client: UldkClient,
        initial: Optional[InitialSelection] = None,
        state: Optional[FetchState] = None,
    ) -> None:
        self.client = client
        self.initial = initial or InitialSelection()
        self.state = state or FetchState()
        self._generations: Dict[AdministrativeLevel, int] = {level: 0 for level in _STATE_SLOTS}

    async def __aenter__(self) -> "UldkLookup":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # === Read access ===
    @property
    def voivodeships(self) -> List[Option]:
        return self.state.voivodeships

    @property
    def districts(self) -> List[Option]:
        return self.state.districts

    @property
    def tenants(self) -> List[Option]:
        return self.state.tenants

    @property
    def precincts(self) -> List[Option]:
        return self.state.precincts

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    # === Administrative cascade ===
    async def start(self) -> None:
        """Load voivodeships and any levels seeded by the initial selection."""
        fetches = [self.fetch_voivodeships()]
        if self.initial.voivodeship:
            fetches.append(self.fetch_districts(self.initial.voivodeship))
        if self.initial.district:
            fetches.append(self.fetch_tenants(self.initial.district))
        if self.initial.tenant:
            fetches.append(self.fetch_precincts(self.initial.tenant))
        await asyncio.gather(*fetches)

    async def _fetch_level(
        self,
        level: AdministrativeLevel,
        teryt: Optional[str] = None,
    ) -> Optional[List[Option]]:
        self._generations[level] += 1
        generation = self._generations[level]
        slot = _STATE_SLOTS[level]

        try:
            options = await self.client.fetch_options(level, teryt)
        except UldkError as e:
            if generation != self._generations[level]:
                log.debug("Dropping stale %s failure for teryt=%s", slot, teryt)
                return None
            log.exception("Failed to fetch %s for teryt=%s", slot, teryt)
            self.state.error = f"Failed to fetch {slot}: {e}"
            return None

        # a superseded response is still returned to its caller, it just
        # does not overwrite the newer slot contents
        if generation != self._generations[level]:
            log.debug("Not storing stale %s response for teryt=%s", slot, teryt)
            return options

        setattr(self.state, slot, options)
        return options

    async def fetch_voivodeships(self) -> Optional[List[Option]]:
        return await self._fetch_level(AdministrativeLevel.VOIVODESHIP)

    async def fetch_districts(self, parent_code: str) -> Optional[List[Option]]:
        return await self._fetch_level(AdministrativeLevel.DISTRICT, parent_code)

    async def fetch_tenants(self, parent_code: str) -> Optional[List[Option]]:
        return await self._fetch_level(AdministrativeLevel.TENANT, parent_code)

    async def fetch_precincts(self, parent_code: str) -> Optional[List[Option]]:
        return await self._fetch_level(AdministrativeLevel.PRECINCT, parent_code)

    # === Geometry ===
    async def fetch_region_geometry(self, region_id: str) -> List[Dict]:
        return await self.client.fetch_geometry(GeometryRequest.REGION, region_id)

    async def fetch_parcel_geometry(self, parcel_id: str) -> List[Dict]:
        return await self.client.fetch_geometry(GeometryRequest.PARCEL, parcel_id)

    async def _geometry_or_none(self, request: GeometryRequest, entity_id: str) -> Optional[List[Dict]]:
        try:
            return await self.client.fetch_geometry(request, entity_id)
        except UldkError:
            log.exception("%s failed for id=%s", request.value, entity_id)
            return None

    async def get_region_geometry_by_id(self, region_id: str) -> Optional[List[Dict]]:
        return await self._geometry_or_none(GeometryRequest.REGION, region_id)

    async def get_parcel_geometry_by_id(self, parcel_id: str) -> Optional[List[Dict]]:
        return await self._geometry_or_none(GeometryRequest.PARCEL, parcel_id)


async def get_lookup(request: Request) -> UldkLookup:
    lookup = getattr(request.app.state, "lookup", None)
    if lookup is None:
        raise HTTPException(status_code=503, detail="ULDK lookup not initialised")
    return lookup
