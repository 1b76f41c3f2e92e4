"""Schemas for contact messages."""

from typing import Optional

from pydantic import BaseModel

from realty_api.schemas.common import OptionalStr, RecordResponse, RequiredStr


class MessageCreate(BaseModel):
    name: RequiredStr
    phone: OptionalStr = None
    email: RequiredStr
    text: RequiredStr


class MessageResponse(RecordResponse):
    name: str
    phone: Optional[str] = None
    email: str
    text: str
