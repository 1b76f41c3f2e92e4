"""Router factory turning a ``ResourceConfig`` into REST endpoints.

Routes produced for a resource at ``/<path>``:

    POST   /<path>                      create (flat resources)
    GET    /<path>?limit=N              list, most recently updated first
    GET    /<path>/search?<field>=...   search
    GET    /<path>/{id}                 read
    PATCH  /<path>/{id}                 full replace
    DELETE /<path>/{id}                 delete
    PATCH  /<path>/{id}/agent           reassign agent (listings)

Nested resources additionally get create, list and search under
``/<parent>/{parent_id}/<path>``.
"""

from typing import List

from fastapi import APIRouter, BackgroundTasks, status

from realty_api.api.deps import DBSession, ListLimit, Media, RequestPayload, SearchParams
from realty_api.core.config import settings
from realty_api.models.agent import Agent
from realty_api.schemas.common import AgentAssignment, MutationResponse
from realty_api.services.resources import (
    CREATE,
    DELETE,
    GET,
    LIST,
    REASSIGN_AGENT,
    SEARCH,
    UPDATE,
    Parent,
    ResourceConfig,
    ResourceService,
    validate_payload,
)


def build_router(config: ResourceConfig) -> APIRouter:
    """Create the router for one resource.

    Args:
        config: Resource description.

    Returns:
        Router with the enabled operations.
    """
    router = APIRouter(tags=[config.tag])
    base = f"/{config.path}"
    schema = config.response_schema
    operations = config.operations

    if CREATE in operations and not config.parents:

        @router.post(base, status_code=status.HTTP_201_CREATED, response_model=MutationResponse)
        async def create_item(
            payload: RequestPayload,
            background_tasks: BackgroundTasks,
            db: DBSession,
            storage: Media,
        ) -> MutationResponse:
            service = ResourceService(config, db, storage)
            item = await service.create(payload, background_tasks)
            return MutationResponse(
                message=f"New {config.label.lower()} {service.display(item)} created.",
                id=item.id,
            )

    if LIST in operations:

        @router.get(base, response_model=List[schema])
        async def list_items(
            db: DBSession,
            storage: Media,
            limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
        ):
            items = await ResourceService(config, db, storage).list(limit)
            return [schema.model_validate(item) for item in items]

    if SEARCH in operations:

        @router.get(f"{base}/search", response_model=List[schema])
        async def search_items(
            params: SearchParams,
            db: DBSession,
            storage: Media,
            limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
        ):
            items = await ResourceService(config, db, storage).search(params, limit)
            return [schema.model_validate(item) for item in items]

    if GET in operations:

        @router.get(f"{base}/{{item_id}}", response_model=schema)
        async def get_item(item_id: str, db: DBSession, storage: Media):
            item = await ResourceService(config, db, storage).get(item_id)
            return schema.model_validate(item)

    if UPDATE in operations:

        @router.patch(f"{base}/{{item_id}}", response_model=MutationResponse)
        async def update_item(
            item_id: str,
            payload: RequestPayload,
            background_tasks: BackgroundTasks,
            db: DBSession,
            storage: Media,
        ) -> MutationResponse:
            service = ResourceService(config, db, storage)
            item = await service.update(item_id, payload, background_tasks)
            return MutationResponse(
                message=f"{config.label} {service.display(item)} updated.",
                id=item.id,
            )

    if DELETE in operations:

        @router.delete(f"{base}/{{item_id}}", response_model=MutationResponse)
        async def delete_item(
            item_id: str,
            background_tasks: BackgroundTasks,
            db: DBSession,
            storage: Media,
        ) -> MutationResponse:
            service = ResourceService(config, db, storage)
            item = await service.delete(item_id, background_tasks)
            return MutationResponse(
                message=f"{config.label} {service.display(item)} with ID: {item_id} deleted.",
                id=item_id,
            )

    if REASSIGN_AGENT in operations:

        @router.patch(f"{base}/{{item_id}}/agent", response_model=MutationResponse)
        async def reassign_agent(
            item_id: str,
            payload: RequestPayload,
            db: DBSession,
            storage: Media,
        ) -> MutationResponse:
            values = validate_payload(AgentAssignment, payload.data)
            service = ResourceService(config, db, storage)
            item, agent = await service.reassign_agent(item_id, values["agent_id"], Agent)
            return MutationResponse(
                message=f"{config.label} {service.display(item)} assigned to agent {agent.name}.",
                id=item.id,
            )

    for parent in config.parents:
        _add_nested_routes(router, config, parent)

    return router


def _add_nested_routes(router: APIRouter, config: ResourceConfig, parent: Parent) -> None:
    """Register create, list and search under ``/<parent>/{parent_id}/<path>``."""
    base = f"/{parent.path}/{{parent_id}}/{config.path}"
    schema = config.response_schema
    column = getattr(config.model, parent.field)

    if CREATE in config.operations:

        @router.post(base, status_code=status.HTTP_201_CREATED, response_model=MutationResponse)
        async def create_nested(
            parent_id: str,
            payload: RequestPayload,
            background_tasks: BackgroundTasks,
            db: DBSession,
            storage: Media,
        ) -> MutationResponse:
            service = ResourceService(config, db, storage)
            await service.require_parent(parent, parent_id)
            item = await service.create(payload, background_tasks, {parent.field: parent_id})
            return MutationResponse(
                message=f"New {config.label.lower()} {service.display(item)} created.",
                id=item.id,
            )

    if LIST in config.operations:

        @router.get(base, response_model=List[schema])
        async def list_nested(
            parent_id: str,
            db: DBSession,
            storage: Media,
            limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
        ):
            service = ResourceService(config, db, storage)
            await service.require_parent(parent, parent_id)
            items = await service.list(limit, [column == parent_id])
            return [schema.model_validate(item) for item in items]

    if SEARCH in config.operations:

        @router.get(f"{base}/search", response_model=List[schema])
        async def search_nested(
            parent_id: str,
            params: SearchParams,
            db: DBSession,
            storage: Media,
            limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
        ):
            service = ResourceService(config, db, storage)
            await service.require_parent(parent, parent_id)
            items = await service.search(params, limit, [column == parent_id])
            return [schema.model_validate(item) for item in items]
