"""Schemas for agents."""

from typing import Optional

from pydantic import BaseModel

from realty_api.schemas.common import OptionalStr, RecordResponse, RequiredStr


class AgentCreate(BaseModel):
    """Agent fields; the picture arrives as the ``image`` upload."""

    name: RequiredStr
    email: OptionalStr = None
    phone: OptionalStr = None


class AgentSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None


class AgentResponse(RecordResponse):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
