"""Site visitors and back-office administrators."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from realty_api.models.favorite import FavoriteRent, FavoriteSale


class User(Base, IdMixin, TimestampMixin):
    """A registered visitor who can bookmark units.

    Attributes:
        username: Display name.
        email: Login e-mail, unique across users.
        password_hash: Hashed password; empty for social sign-ups.
        image_url: Public URL of the profile picture.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(191), nullable=False)
    email: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    favorite_sales: Mapped[list["FavoriteSale"]] = relationship(
        "FavoriteSale",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorite_rents: Mapped[list["FavoriteRent"]] = relationship(
        "FavoriteRent",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Admin(Base, IdMixin, TimestampMixin):
    """A back-office account."""

    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_super: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
