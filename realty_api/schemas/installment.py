"""Schemas for installment plans."""

from typing import List, Optional

from pydantic import BaseModel, Field

from realty_api.schemas.common import RecordResponse, RequiredStr


class InstallmentCreate(BaseModel):
    title: RequiredStr
    percentage: float = Field(ge=0, le=100)


class InstallmentBatch(BaseModel):
    """Several installments created in one transaction."""

    installments: List[InstallmentCreate] = Field(min_length=1)


class InstallmentResponse(RecordResponse):
    title: str
    percentage: float
    project_id: Optional[str] = None
    property_id: Optional[str] = None
