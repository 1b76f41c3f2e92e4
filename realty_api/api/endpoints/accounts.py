"""Users and admins.

Passwords are hashed with passlib before they reach the database and
are never serialized. User responses include the favorited units.
"""

from typing import Any, Dict

from fastapi import APIRouter

from realty_api.api.resource import build_router
from realty_api.models.account import Admin, User
from realty_api.schemas.account import (
    AdminCreate,
    AdminResponse,
    AdminUpdate,
    UserCreate,
    UserResponse,
)
from realty_api.services.media import PICTURE, MediaSlot
from realty_api.services.resources import CONTAINS, ResourceConfig
from realty_api.services.security import hash_password


def hash_credentials(values: Dict[str, Any]) -> Dict[str, Any]:
    """Replace a plain ``password`` with ``password_hash``; keep the old hash if absent."""
    password = values.pop("password", None)
    if password:
        values["password_hash"] = hash_password(password)
    return values


users = ResourceConfig(
    path="users",
    model=User,
    label="User",
    plural="users",
    create_schema=UserCreate,
    response_schema=UserResponse,
    display_field="username",
    natural_keys=(("email",),),
    includes=("favorite_sales.sale_unit", "favorite_rents.rent_unit"),
    search_fields={"username": CONTAINS, "email": CONTAINS},
    media=(MediaSlot(field="image", attr="image_url", kind=PICTURE, directory="images/users"),),
    media_key="email",
    prepare=hash_credentials,
)

admins = ResourceConfig(
    path="admins",
    model=Admin,
    label="Admin",
    plural="admins",
    create_schema=AdminCreate,
    update_schema=AdminUpdate,
    response_schema=AdminResponse,
    display_field="username",
    natural_keys=(("username",), ("email",)),
    search_fields={"username": CONTAINS, "email": CONTAINS},
    media=(MediaSlot(field="image", attr="image_url", kind=PICTURE, directory="images/admins"),),
    media_key="username",
    prepare=hash_credentials,
)

router = APIRouter()
router.include_router(build_router(users))
router.include_router(build_router(admins))
