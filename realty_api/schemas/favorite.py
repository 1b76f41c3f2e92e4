"""Schemas for favorite sale and rent units."""

from pydantic import BaseModel

from realty_api.schemas.common import RecordResponse, RequiredStr
from realty_api.schemas.unit import RentUnitSummary, SaleUnitSummary


class FavoriteSaleCreate(BaseModel):
    sale_unit_id: RequiredStr


class FavoriteRentCreate(BaseModel):
    rent_unit_id: RequiredStr


class FavoriteSaleResponse(RecordResponse):
    sale_unit_id: str
    sale_unit: SaleUnitSummary


class FavoriteRentResponse(RecordResponse):
    rent_unit_id: str
    rent_unit: RentUnitSummary
