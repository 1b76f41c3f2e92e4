"""Field types and shared response shapes."""

import json
from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints


def split_list(value: Any) -> Any:
    """Accept a list, a JSON array string or a comma separated string.

    Form submissions send list fields as repeated keys, a JSON encoded
    array or ``"Gym, Pool"``; all three become ``["Gym", "Pool"]``.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                return json.loads(text)
            except ValueError:
                return value
        return [part.strip() for part in text.split(",") if part.strip()]
    return value


RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TitleList = Annotated[List[RequiredStr], BeforeValidator(split_list)]


class MutationResponse(BaseModel):
    """Body returned by create, update and delete."""

    message: str
    id: str


class ImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    url: str
    position: int


class TitledChildResponse(BaseModel):
    """A view or amenity attached to a listing."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    position: int


class RecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class AgentAssignment(BaseModel):
    agent_id: RequiredStr


class IdList(BaseModel):
    ids: Annotated[List[RequiredStr], BeforeValidator(split_list)]


def optional_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


OptionalStr = Annotated[Optional[str], BeforeValidator(optional_str)]


class BatchResponse(BaseModel):
    """Body returned by operations touching several rows."""

    message: str
    ids: List[str]
