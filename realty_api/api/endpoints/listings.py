"""Properties and projects.

Both carry an image gallery, an optional PDF fact sheet and an agent.
Properties also hold a blueprint image and block deletion while sale
or rent units exist.
"""

from fastapi import APIRouter

from realty_api.api.resource import build_router
from realty_api.models.agent import Agent
from realty_api.models.listing import Project, Property, RentUnit, SaleUnit
from realty_api.models.media import ListingAmenity, ListingView
from realty_api.schemas.listing import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
)
from realty_api.services.media import GALLERY, PDF, PICTURE, MediaSlot
from realty_api.services.resources import (
    AT_LEAST,
    AT_MOST,
    CONTAINS,
    CRUD,
    EQUALS,
    FLAG,
    REASSIGN_AGENT,
    ChildCollection,
    Dependent,
    MediaPeer,
    Reference,
    ResourceConfig,
)

FACT_SHEET = MediaSlot(field="pdf", attr="pdf_url", kind=PDF, directory="factSheets")

LISTING_SEARCH = {
    "title": CONTAINS,
    "owner": CONTAINS,
    "city": CONTAINS,
    "country": CONTAINS,
    "location": CONTAINS,
    "category": CONTAINS,
    "agent_id": EQUALS,
}

properties = ResourceConfig(
    path="properties",
    model=Property,
    label="Property",
    plural="properties",
    create_schema=PropertyCreate,
    update_schema=PropertyUpdate,
    response_schema=PropertyResponse,
    natural_keys=(("title",),),
    children=(
        ChildCollection("views", ListingView),
        ChildCollection("amenities", ListingAmenity),
    ),
    includes=("images", "views", "amenities", "installments", "agent"),
    search_fields={
        **LISTING_SEARCH,
        "type": CONTAINS,
        "area": AT_MOST,
        "price": AT_MOST,
        "floors": AT_LEAST,
    },
    references=(Reference("agent_id", Agent, "Agent"),),
    dependents=(
        Dependent(SaleUnit, "property_id", "sale units"),
        Dependent(RentUnit, "property_id", "rent units"),
    ),
    media=(
        MediaSlot(
            field="images",
            attr="images",
            kind=GALLERY,
            directory="images/properties",
            required_on_create=True,
        ),
        MediaSlot(
            field="blueprint",
            attr="blueprint_url",
            kind=PICTURE,
            directory="images/bluePrints",
        ),
        FACT_SHEET,
    ),
    media_key="title",
    media_peers=(MediaPeer("pdf", Project, "title", "pdf_url", "Project"),),
    operations=CRUD | {REASSIGN_AGENT},
)

projects = ResourceConfig(
    path="projects",
    model=Project,
    label="Project",
    plural="projects",
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    response_schema=ProjectResponse,
    natural_keys=(("title",),),
    children=(ChildCollection("amenities", ListingAmenity),),
    includes=("images", "amenities", "installments", "agent"),
    search_fields={
        **LISTING_SEARCH,
        "off_plan": FLAG,
        "completion_date": CONTAINS,
    },
    references=(Reference("agent_id", Agent, "Agent"),),
    media=(
        MediaSlot(
            field="images",
            attr="images",
            kind=GALLERY,
            directory="images/projects",
            required_on_create=True,
        ),
        FACT_SHEET,
    ),
    media_key="title",
    media_peers=(MediaPeer("pdf", Property, "title", "pdf_url", "Property"),),
    operations=CRUD | {REASSIGN_AGENT},
)

router = APIRouter()
router.include_router(build_router(properties))
router.include_router(build_router(projects))
