"""Pydantic models for ULDK data and request/response schemas."""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List


# === ULDK Vocabulary ===
class AdministrativeLevel(str, Enum):
    VOIVODESHIP = "wojewodztwo"
    DISTRICT = "powiat"
    TENANT = "gmina"
    PRECINCT = "obreb"


class GeometryRequest(str, Enum):
    REGION = "GetRegionById"
    PARCEL = "GetParcelById"


# === Administrative Models ===
class Option(BaseModel):
    label: str = Field(..., description="Display name of the administrative unit")
    value: str = Field(..., description="TERYT code of the administrative unit")

    class Config:
        frozen = True


class InitialSelection(BaseModel):
    voivodeship: Optional[str] = Field(default=None, description="Voivodeship TERYT code to load districts for")
    district: Optional[str] = Field(default=None, description="District TERYT code to load tenants for")
    tenant: Optional[str] = Field(default=None, description="Tenant TERYT code to load precincts for")


class FetchState(BaseModel):
    voivodeships: List[Option] = Field(default_factory=list)
    districts: List[Option] = Field(default_factory=list)
    tenants: List[Option] = Field(default_factory=list)
    precincts: List[Option] = Field(default_factory=list)
    error: Optional[str] = None


# === Geometry Models ===
class GeometryListResponse(BaseModel):
    id: str
    request: GeometryRequest
    count: int
    geometries: List[dict] = Field(..., description="GeoJSON geometries in EPSG:4326")
