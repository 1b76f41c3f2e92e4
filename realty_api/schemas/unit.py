"""Schemas for sale and rent units."""

from typing import List

from pydantic import BaseModel, Field

from realty_api.schemas.common import (
    ImageResponse,
    RecordResponse,
    RequiredStr,
    TitledChildResponse,
    TitleList,
)
from realty_api.schemas.listing import PropertySummary


class UnitFields(BaseModel):
    title: RequiredStr
    type: RequiredStr
    unit_no: RequiredStr
    floor: RequiredStr
    area: float = Field(gt=0)
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    parking_count: int = Field(ge=0)
    description: RequiredStr
    views: TitleList = []


class SaleUnitCreate(UnitFields):
    rp_sqft: float = Field(ge=0)
    total_price: float = Field(ge=0)


class RentUnitCreate(UnitFields):
    rent_price: float = Field(ge=0)


class UnitResponse(RecordResponse):
    property_id: str
    title: str
    type: str
    unit_no: str
    floor: str
    area: float
    bedrooms: int
    bathrooms: int
    parking_count: int
    description: str
    property: PropertySummary
    images: List[ImageResponse] = []
    views: List[TitledChildResponse] = []


class SaleUnitResponse(UnitResponse):
    rp_sqft: float
    total_price: float


class RentUnitResponse(UnitResponse):
    rent_price: float


class UnitSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: str
    type: str
    area: float
    bedrooms: int
    bathrooms: int


class SaleUnitSummary(UnitSummary):
    total_price: float


class RentUnitSummary(UnitSummary):
    rent_price: float
