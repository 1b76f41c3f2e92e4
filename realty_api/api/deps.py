"""Dependency injection utilities for API endpoints.

This module provides common dependencies used across API routes,
such as database sessions, media storage, list limits and the
request payload reader.
"""

import json
from functools import lru_cache
from typing import Annotated, Any, Dict, List

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from realty_api.core.config import settings
from realty_api.core.exceptions import BadRequestException
from realty_api.services.database import get_db
from realty_api.services.media import MediaStorage
from realty_api.services.resources import Payload

FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


@lru_cache
def get_media_storage() -> MediaStorage:
    """Provide the storage rooted at the configured uploads directory."""
    return MediaStorage(
        root=settings.uploads_path,
        public_base=settings.ROOT_PATH,
        quality=settings.WEBP_QUALITY,
        max_bytes=settings.max_upload_bytes,
    )


Media = Annotated[MediaStorage, Depends(get_media_storage)]

# Maximum number of rows returned by list and search endpoints
ListLimit = Annotated[
    int,
    Query(ge=1, le=settings.MAX_LIST_LIMIT, description="Max records to return"),
]


async def read_payload(request: Request) -> Payload:
    """Read a JSON or form body into values and uploaded files.

    Repeated form keys become lists and empty file inputs are ignored.

    Raises:
        BadRequestException: If a JSON body is malformed or not an object.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        values: Dict[str, List[Any]] = {}
        files: Dict[str, List[UploadFile]] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    files.setdefault(key, []).append(value)
            else:
                values.setdefault(key, []).append(value)
        data = {key: items[0] if len(items) == 1 else items for key, items in values.items()}
        return Payload(data=data, files=files)

    body = await request.body()
    if not body.strip():
        return Payload()
    try:
        data = json.loads(body)
    except ValueError:
        raise BadRequestException("Malformed JSON body.")
    if not isinstance(data, dict):
        raise BadRequestException("Request body must be a JSON object.")
    return Payload(data=data)


RequestPayload = Annotated[Payload, Depends(read_payload)]


def search_params(request: Request) -> Dict[str, str]:
    """Non-empty query parameters other than ``limit``, used as search filters."""
    return {
        key: value.strip()
        for key, value in request.query_params.items()
        if key != "limit" and value.strip()
    }


SearchParams = Annotated[Dict[str, str], Depends(search_params)]
