"""Installment plans of projects and properties.

Installments are created under their owner, one at a time or as a
batch in a single transaction.
"""

from fastapi import status

from realty_api.api.deps import DBSession, Media, RequestPayload
from realty_api.api.resource import build_router
from realty_api.models.installment import Installment
from realty_api.models.listing import Project, Property
from realty_api.schemas.common import BatchResponse
from realty_api.schemas.installment import (
    InstallmentBatch,
    InstallmentCreate,
    InstallmentResponse,
)
from realty_api.services.resources import (
    CONTAINS,
    Parent,
    ResourceConfig,
    ResourceService,
    commit_changes,
    validate_payload,
)

installments = ResourceConfig(
    path="installments",
    model=Installment,
    label="Installment",
    plural="installments",
    create_schema=InstallmentCreate,
    response_schema=InstallmentResponse,
    search_fields={"title": CONTAINS},
    parents=(
        Parent(Project, "project_id", "projects", "Project"),
        Parent(Property, "property_id", "properties", "Property"),
    ),
)

router = build_router(installments)


def add_batch_route(parent: Parent) -> None:
    @router.post(
        f"/{parent.path}/{{parent_id}}/installments/batch",
        status_code=status.HTTP_201_CREATED,
        response_model=BatchResponse,
    )
    async def create_installments(
        parent_id: str,
        payload: RequestPayload,
        db: DBSession,
        storage: Media,
    ) -> BatchResponse:
        service = ResourceService(installments, db, storage)
        await service.require_parent(parent, parent_id)
        entries = validate_payload(InstallmentBatch, payload.data)["installments"]

        items = [Installment(**entry, **{parent.field: parent_id}) for entry in entries]
        db.add_all(items)
        await commit_changes(db, installments.label)
        return BatchResponse(
            message=f"{len(items)} installments created.",
            ids=[item.id for item in items],
        )


for owner in installments.parents:
    add_batch_route(owner)
