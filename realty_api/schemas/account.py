"""Schemas for users and admins.

Passwords are accepted on input only and stored hashed.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr

from realty_api.schemas.common import OptionalStr, RecordResponse, RequiredStr
from realty_api.schemas.favorite import FavoriteRentResponse, FavoriteSaleResponse


class UserCreate(BaseModel):
    username: RequiredStr
    email: EmailStr
    password: OptionalStr = None


class AdminUpdate(BaseModel):
    username: RequiredStr
    email: EmailStr
    is_super: bool = False
    password: OptionalStr = None


class AdminCreate(AdminUpdate):
    password: RequiredStr


class UserResponse(RecordResponse):
    username: str
    email: str
    image_url: Optional[str] = None
    favorite_sales: List[FavoriteSaleResponse] = []
    favorite_rents: List[FavoriteRentResponse] = []


class AdminResponse(RecordResponse):
    username: str
    email: str
    is_super: bool
    image_url: Optional[str] = None
