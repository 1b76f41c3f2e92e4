"""Contact messages: create, read, delete and bulk delete. No update."""

from realty_api.api.deps import DBSession, RequestPayload
from realty_api.api.resource import build_router
from realty_api.core.exceptions import NotFoundException
from realty_api.models.message import Message
from realty_api.schemas.common import BatchResponse, IdList
from realty_api.schemas.message import MessageCreate, MessageResponse
from realty_api.services.repository import Repository
from realty_api.services.resources import (
    CONTAINS,
    CREATE,
    DELETE,
    GET,
    LIST,
    SEARCH,
    ResourceConfig,
    commit_changes,
    validate_payload,
)

messages = ResourceConfig(
    path="messages",
    model=Message,
    label="Message",
    plural="messages",
    create_schema=MessageCreate,
    response_schema=MessageResponse,
    display_field="name",
    capitalize=("name",),
    search_fields={"name": CONTAINS, "email": CONTAINS, "phone": CONTAINS, "text": CONTAINS},
    operations=frozenset({CREATE, LIST, SEARCH, GET, DELETE}),
)

router = build_router(messages)


@router.delete("/messages", response_model=BatchResponse)
async def delete_messages(payload: RequestPayload, db: DBSession) -> BatchResponse:
    """Delete several messages at once.

    Unknown ids are ignored; if none of the ids exist the request
    fails with 404.
    """
    ids = list(dict.fromkeys(validate_payload(IdList, payload.data)["ids"]))
    repo = Repository(db, Message)
    found = await repo.list([Message.id.in_(ids)], limit=len(ids))
    if not found:
        raise NotFoundException("No messages found!", details={"ids": ids})

    deleted_ids = [message.id for message in found]
    await repo.delete_many(deleted_ids)
    await commit_changes(db, messages.label)
    return BatchResponse(message=f"{len(deleted_ids)} messages deleted.", ids=deleted_ids)
