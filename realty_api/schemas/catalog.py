"""Schemas for categories, types, views and amenities."""

from pydantic import BaseModel

from realty_api.schemas.common import RecordResponse, RequiredStr


class CatalogEntryCreate(BaseModel):
    title: RequiredStr


class CatalogEntryResponse(RecordResponse):
    title: str
