"""Favorite sale and rent units of a user.

    GET    /users/{user_id}/fav-sales                   list
    GET    /users/{user_id}/fav-sales/search?title=...  search by unit title
    POST   /users/{user_id}/fav-sales                   add {"sale_unit_id": ...}
    DELETE /users/{user_id}/fav-sales/{sale_unit_id}    remove

``fav-rents`` works the same way with ``rent_unit_id``.
"""

from dataclasses import dataclass
from typing import List, Type

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy import select

from realty_api.api.deps import DBSession, ListLimit, RequestPayload, SearchParams
from realty_api.core.config import settings
from realty_api.core.exceptions import BadRequestException, ConflictException, NotFoundException
from realty_api.models.account import User
from realty_api.models.base import Base
from realty_api.models.favorite import FavoriteRent, FavoriteSale
from realty_api.models.listing import RentUnit, SaleUnit
from realty_api.schemas.common import MutationResponse
from realty_api.schemas.favorite import (
    FavoriteRentCreate,
    FavoriteRentResponse,
    FavoriteSaleCreate,
    FavoriteSaleResponse,
)
from realty_api.services.repository import Repository
from realty_api.services.resources import commit_changes, validate_payload


@dataclass(frozen=True)
class FavoriteKind:
    """One kind of bookmark, linking users to a unit model."""

    path: str
    model: Type[Base]
    unit_model: Type[Base]
    unit_field: str
    unit_attr: str
    label: str
    create_schema: Type[BaseModel]
    response_schema: Type[BaseModel]


FAVORITE_SALES = FavoriteKind(
    path="fav-sales",
    model=FavoriteSale,
    unit_model=SaleUnit,
    unit_field="sale_unit_id",
    unit_attr="sale_unit",
    label="Sale unit",
    create_schema=FavoriteSaleCreate,
    response_schema=FavoriteSaleResponse,
)

FAVORITE_RENTS = FavoriteKind(
    path="fav-rents",
    model=FavoriteRent,
    unit_model=RentUnit,
    unit_field="rent_unit_id",
    unit_attr="rent_unit",
    label="Rent unit",
    create_schema=FavoriteRentCreate,
    response_schema=FavoriteRentResponse,
)


async def require_user(db, user_id: str) -> None:
    if not await Repository(db, User).exists(user_id):
        raise NotFoundException("User not found!", details={"id": user_id})


def build_favorites_router(kind: FavoriteKind) -> APIRouter:
    """Create list, search, add and remove routes for one favorite kind."""
    router = APIRouter(tags=["Favorites"])
    base = f"/users/{{user_id}}/{kind.path}"
    schema = kind.response_schema
    unit_column = getattr(kind.model, kind.unit_field)

    def favorites(db) -> Repository:
        return Repository(db, kind.model, [kind.unit_attr])

    @router.get(base, response_model=List[schema])
    async def list_favorites(
        user_id: str,
        db: DBSession,
        limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
    ):
        await require_user(db, user_id)
        items = await favorites(db).list([kind.model.user_id == user_id], limit)
        if not items:
            raise NotFoundException("No favorites found!")
        return [schema.model_validate(item) for item in items]

    @router.get(f"{base}/search", response_model=List[schema])
    async def search_favorites(
        user_id: str,
        params: SearchParams,
        db: DBSession,
        limit: ListLimit = settings.DEFAULT_LIST_LIMIT,
    ):
        if not params:
            raise BadRequestException("No search parameters provided.")
        if set(params) != {"title"}:
            raise BadRequestException(
                "Favorites can only be searched by title.",
                details={"allowed": ["title"]},
            )

        await require_user(db, user_id)
        matching_units = select(kind.unit_model.id).where(
            kind.unit_model.title.icontains(params["title"], autoescape=True)
        )
        items = await favorites(db).list(
            [kind.model.user_id == user_id, unit_column.in_(matching_units)],
            limit,
        )
        if not items:
            raise NotFoundException("No favorites found!")
        return [schema.model_validate(item) for item in items]

    @router.post(base, status_code=status.HTTP_201_CREATED, response_model=MutationResponse)
    async def add_favorite(
        user_id: str,
        payload: RequestPayload,
        db: DBSession,
    ) -> MutationResponse:
        unit_id = validate_payload(kind.create_schema, payload.data)[kind.unit_field]
        await require_user(db, user_id)
        unit = await Repository(db, kind.unit_model).get_or_404(unit_id, kind.label)

        repo = favorites(db)
        if await repo.find_by({"user_id": user_id, kind.unit_field: unit_id}):
            raise ConflictException(f"{kind.label} {unit.title} is already a favorite!")

        favorite = repo.add(kind.model(user_id=user_id, **{kind.unit_field: unit_id}))
        await commit_changes(db, "Favorite")
        return MutationResponse(
            message=f"{kind.label} {unit.title} added to favorites.",
            id=favorite.id,
        )

    @router.delete(f"{base}/{{unit_id}}", response_model=MutationResponse)
    async def remove_favorite(user_id: str, unit_id: str, db: DBSession) -> MutationResponse:
        repo = favorites(db)
        favorite = await repo.find_by({"user_id": user_id, kind.unit_field: unit_id})
        if favorite is None:
            raise NotFoundException("Favorite not found!", details={kind.unit_field: unit_id})

        await repo.delete(favorite)
        await commit_changes(db, "Favorite")
        return MutationResponse(
            message=f"{kind.label} with ID: {unit_id} removed from favorites.",
            id=favorite.id,
        )

    return router


router = APIRouter()
router.include_router(build_favorites_router(FAVORITE_SALES))
router.include_router(build_favorites_router(FAVORITE_RENTS))
