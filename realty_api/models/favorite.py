"""Bookmarks linking users to sale and rent units."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from realty_api.models.account import User
    from realty_api.models.listing import RentUnit, SaleUnit


class FavoriteSale(Base, IdMixin, TimestampMixin):
    """A sale unit bookmarked by a user."""

    __tablename__ = "favorite_sales"
    __table_args__ = (
        UniqueConstraint("user_id", "sale_unit_id", name="uq_favorite_sale"),
    )

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sale_unit_id: Mapped[str] = mapped_column(
        ForeignKey("sale_units.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="favorite_sales")
    sale_unit: Mapped["SaleUnit"] = relationship("SaleUnit", back_populates="favorites")


class FavoriteRent(Base, IdMixin, TimestampMixin):
    """A rent unit bookmarked by a user."""

    __tablename__ = "favorite_rents"
    __table_args__ = (
        UniqueConstraint("user_id", "rent_unit_id", name="uq_favorite_rent"),
    )

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rent_unit_id: Mapped[str] = mapped_column(
        ForeignKey("rent_units.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="favorite_rents")
    rent_unit: Mapped["RentUnit"] = relationship("RentUnit", back_populates="favorites")
