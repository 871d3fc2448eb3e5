"""
ULDK (Usługa Lokalizacji Działek Katastralnych) HTTP client.
Talks to the GUGiK service, which answers in plain text: pipe-delimited lists
for administrative units and hex WKB for region/parcel geometry.

API docs: https://uldk.gugik.gov.pl/opis.html
"""
import logging
from typing import Dict, List, Optional

import httpx

from uldk_client.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from uldk_client.errors import NetworkError
from uldk_client.models import AdministrativeLevel, GeometryRequest, Option
from uldk_client.services.parsing import parse_geometry_response, parse_list

log = logging.getLogger(__name__)

LIST_ENDPOINT = "service.php"
GEOMETRY_ENDPOINT = ""


class UldkClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "UldkClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_text(self, endpoint: str, params: Dict[str, str]) -> str:
        log.debug("ULDK GET %s%s params=%s", self.base_url, endpoint, params)
        try:
            response = await self._client.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"ULDK returned HTTP {e.response.status_code} for {e.request.url}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"ULDK request failed: {e!r}") from e
        return response.text

    async def fetch_options(
        self,
        level: AdministrativeLevel,
        teryt: Optional[str] = None,
    ) -> List[Option]:
        """Fetch the units of one administrative level, optionally under a parent TERYT code."""
        level = AdministrativeLevel(level)
        params = {
            "obiekt": level.value,
            "wynik": f"{level.value},teryt",
        }
        if teryt:
            params["teryt"] = teryt

        data = await self._get_text(LIST_ENDPOINT, params)
        options = parse_list(data)
        log.info("ULDK %s teryt=%s -> %d options", level.value, teryt, len(options))
        return options

    async def fetch_geometry(self, request: GeometryRequest, entity_id: str) -> List[Dict]:
        """
        Fetch and decode geometry for a region or parcel.
        Coordinates come back as [lon, lat] in EPSG:4326.
        """
        request = GeometryRequest(request)
        data = await self._get_text(
            GEOMETRY_ENDPOINT,
            {"request": request.value, "id": entity_id},
        )
        geometries = parse_geometry_response(data)
        log.info("ULDK %s id=%s -> %d geometries", request.value, entity_id, len(geometries))
        return geometries

    async def get_region_geometry(self, region_id: str) -> List[Dict]:
        return await self.fetch_geometry(GeometryRequest.REGION, region_id)

    async def get_parcel_geometry(self, parcel_id: str) -> List[Dict]:
        return await self.fetch_geometry(GeometryRequest.PARCEL, parcel_id)
