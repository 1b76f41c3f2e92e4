"""Sale and rent units, created under their property."""

from fastapi import APIRouter

from realty_api.api.resource import build_router
from realty_api.models.listing import Property, RentUnit, SaleUnit
from realty_api.models.media import ListingView
from realty_api.schemas.unit import (
    RentUnitCreate,
    RentUnitResponse,
    SaleUnitCreate,
    SaleUnitResponse,
)
from realty_api.services.media import GALLERY, MediaSlot
from realty_api.services.resources import (
    AT_LEAST,
    AT_MOST,
    CONTAINS,
    ChildCollection,
    Parent,
    ResourceConfig,
)

UNIT_SEARCH = {
    "title": CONTAINS,
    "type": CONTAINS,
    "unit_no": CONTAINS,
    "floor": CONTAINS,
    "area": AT_MOST,
    "bedrooms": AT_LEAST,
    "bathrooms": AT_LEAST,
    "parking_count": AT_LEAST,
}

PROPERTY_PARENT = Parent(Property, "property_id", "properties", "Property")


def unit_gallery(directory: str) -> MediaSlot:
    return MediaSlot(
        field="images",
        attr="images",
        kind=GALLERY,
        directory=directory,
        required_on_create=True,
    )


sale_units = ResourceConfig(
    path="sale-units",
    model=SaleUnit,
    label="Sale unit",
    plural="sale units",
    create_schema=SaleUnitCreate,
    response_schema=SaleUnitResponse,
    natural_keys=(("title",),),
    children=(ChildCollection("views", ListingView),),
    includes=("images", "views", "property"),
    search_fields={**UNIT_SEARCH, "rp_sqft": AT_MOST, "total_price": AT_MOST},
    parents=(PROPERTY_PARENT,),
    media=(unit_gallery("images/sales"),),
    media_key="title",
)

rent_units = ResourceConfig(
    path="rent-units",
    model=RentUnit,
    label="Rent unit",
    plural="rent units",
    create_schema=RentUnitCreate,
    response_schema=RentUnitResponse,
    natural_keys=(("title",),),
    children=(ChildCollection("views", ListingView),),
    includes=("images", "views", "property"),
    search_fields={**UNIT_SEARCH, "rent_price": AT_MOST},
    parents=(PROPERTY_PARENT,),
    media=(unit_gallery("images/rents"),),
    media_key="title",
)

router = APIRouter()
router.include_router(build_router(sale_units))
router.include_router(build_router(rent_units))
