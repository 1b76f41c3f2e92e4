"""Agents, each with a single picture stored as ``images/agents/<name>.webp``."""

from realty_api.api.resource import build_router
from realty_api.models.agent import Agent
from realty_api.models.listing import Project, Property
from realty_api.schemas.agent import AgentCreate, AgentResponse
from realty_api.services.media import PICTURE, MediaSlot
from realty_api.services.resources import CONTAINS, Dependent, ResourceConfig

agents = ResourceConfig(
    path="agents",
    model=Agent,
    label="Agent",
    plural="agents",
    create_schema=AgentCreate,
    response_schema=AgentResponse,
    display_field="name",
    natural_keys=(("name",),),
    search_fields={"name": CONTAINS, "email": CONTAINS, "phone": CONTAINS},
    dependents=(
        Dependent(Property, "agent_id", "properties"),
        Dependent(Project, "agent_id", "projects"),
    ),
    media=(
        MediaSlot(
            field="image",
            attr="image_url",
            kind=PICTURE,
            directory="images/agents",
            required_on_create=True,
        ),
    ),
    media_key="name",
)

router = build_router(agents)
