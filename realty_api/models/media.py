"""Ordered child rows attached to listings and articles.

Each row points at exactly one owner through one of its nullable
foreign keys. Rows are removed together with their owner.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from realty_api.models.base import Base, IdMixin


def _owner_fk(table: str) -> Mapped[Optional[str]]:
    return mapped_column(
        ForeignKey(f"{table}.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )


class Image(Base, IdMixin):
    """Public URL of one converted image.

    Attributes:
        url: Public URL of the WebP file.
        position: Order of the image within its owner.
    """

    __tablename__ = "images"

    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    property_id: Mapped[Optional[str]] = _owner_fk("properties")
    project_id: Mapped[Optional[str]] = _owner_fk("projects")
    sale_unit_id: Mapped[Optional[str]] = _owner_fk("sale_units")
    rent_unit_id: Mapped[Optional[str]] = _owner_fk("rent_units")
    article_id: Mapped[Optional[str]] = _owner_fk("articles")


class ListingView(Base, IdMixin):
    """A view title attached to a property or unit."""

    __tablename__ = "listing_views"

    title: Mapped[str] = mapped_column(String(191), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    property_id: Mapped[Optional[str]] = _owner_fk("properties")
    sale_unit_id: Mapped[Optional[str]] = _owner_fk("sale_units")
    rent_unit_id: Mapped[Optional[str]] = _owner_fk("rent_units")


class ListingAmenity(Base, IdMixin):
    """An amenity title attached to a property or project."""

    __tablename__ = "listing_amenities"

    title: Mapped[str] = mapped_column(String(191), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    property_id: Mapped[Optional[str]] = _owner_fk("properties")
    project_id: Mapped[Optional[str]] = _owner_fk("projects")
