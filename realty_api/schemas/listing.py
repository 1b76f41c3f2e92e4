"""Schemas for properties and projects.

Create schemas carry ``agent_id``; update schemas do not, the agent is
changed through ``PATCH /<resource>/{id}/agent``. Images, blueprints and
fact sheets arrive as multipart uploads and are not part of the body.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from realty_api.schemas.agent import AgentSummary
from realty_api.schemas.common import (
    ImageResponse,
    OptionalStr,
    RecordResponse,
    RequiredStr,
    TitledChildResponse,
    TitleList,
)
from realty_api.schemas.installment import InstallmentResponse


class ListingFields(BaseModel):
    title: RequiredStr
    owner: RequiredStr
    city: RequiredStr
    country: RequiredStr
    location: RequiredStr
    category: RequiredStr
    map_url: RequiredStr
    description: OptionalStr = None
    amenities: TitleList = []


class PropertyUpdate(ListingFields):
    type: RequiredStr
    area: float = Field(gt=0)
    price: float = Field(ge=0)
    floors: Optional[int] = Field(default=None, ge=0)
    views: TitleList = []


class PropertyCreate(PropertyUpdate):
    agent_id: RequiredStr


class ProjectUpdate(ListingFields):
    off_plan: bool = False
    completion_date: OptionalStr = None


class ProjectCreate(ProjectUpdate):
    agent_id: RequiredStr


class ListingResponse(RecordResponse):
    title: str
    owner: str
    city: str
    country: str
    location: str
    category: str
    map_url: str
    description: Optional[str] = None
    pdf_url: Optional[str] = None
    agent_id: str
    agent: Optional[AgentSummary] = None
    images: List[ImageResponse] = []
    amenities: List[TitledChildResponse] = []
    installments: List[InstallmentResponse] = []


class PropertyResponse(ListingResponse):
    type: str
    area: float
    price: float
    floors: Optional[int] = None
    blueprint_url: Optional[str] = None
    views: List[TitledChildResponse] = []


class ProjectResponse(ListingResponse):
    off_plan: bool
    completion_date: Optional[str] = None


class PropertySummary(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: str
    city: str
    country: str
    location: str
