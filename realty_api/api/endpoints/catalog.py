"""Categories, types, views and amenities.

The four lookup tables share one shape: a capitalized, unique title.
"""

from fastapi import APIRouter

from realty_api.api.resource import build_router
from realty_api.models.catalog import Amenity, Category, PropertyType, View
from realty_api.schemas.catalog import CatalogEntryCreate, CatalogEntryResponse
from realty_api.services.resources import CONTAINS, ResourceConfig


def catalog_config(path: str, model, label: str, plural: str) -> ResourceConfig:
    return ResourceConfig(
        path=path,
        model=model,
        label=label,
        plural=plural,
        create_schema=CatalogEntryCreate,
        response_schema=CatalogEntryResponse,
        natural_keys=(("title",),),
        capitalize=("title",),
        search_fields={"title": CONTAINS},
    )


categories = catalog_config("categories", Category, "Category", "categories")
types = catalog_config("types", PropertyType, "Type", "types")
views = catalog_config("views", View, "View", "views")
amenities = catalog_config("amenities", Amenity, "Amenity", "amenities")

router = APIRouter()
for config in (categories, types, views, amenities):
    router.include_router(build_router(config))
