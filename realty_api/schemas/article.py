"""Schemas for articles."""

from typing import List

from pydantic import BaseModel

from realty_api.schemas.common import ImageResponse, RecordResponse, RequiredStr


class ArticleCreate(BaseModel):
    title: RequiredStr
    description: RequiredStr
    body: RequiredStr


class ArticleResponse(RecordResponse):
    title: str
    description: str
    body: str
    images: List[ImageResponse] = []
