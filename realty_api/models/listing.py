"""Listing models: properties, projects and their sale/rent units.

A Property is a building handled by an Agent and split into sale and
rent units. A Project is an off-plan or under-construction development
that carries an installment plan.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin
from realty_api.models.media import Image, ListingAmenity, ListingView

if TYPE_CHECKING:
    from realty_api.models.agent import Agent
    from realty_api.models.favorite import FavoriteRent, FavoriteSale
    from realty_api.models.installment import Installment


def _children(target: str, order_column: str = "position"):
    return relationship(
        target,
        order_by=f"{target}.{order_column}",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ListingMixin:
    """Descriptive columns shared by properties and projects."""

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    owner: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(191), nullable=False)
    map_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pdf_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)


class Property(Base, IdMixin, TimestampMixin, ListingMixin):
    """A building offered through an agent.

    Attributes:
        type: Building type title.
        area: Total area in square feet.
        price: Starting price.
        floors: Number of floors.
        blueprint_url: Public URL of the floor plan image.
        agent_id: Foreign key to the responsible agent.
    """

    __tablename__ = "properties"

    type: Mapped[str] = mapped_column(String(191), nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    floors: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    blueprint_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    agent_id: Mapped[str] = mapped_column(
        ForeignKey("agents.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    agent: Mapped["Agent"] = relationship("Agent", back_populates="properties")
    images: Mapped[list[Image]] = _children("Image")
    views: Mapped[list[ListingView]] = _children("ListingView")
    amenities: Mapped[list[ListingAmenity]] = _children("ListingAmenity")
    installments: Mapped[list["Installment"]] = relationship(
        "Installment",
        back_populates="property",
        order_by="Installment.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sale_units: Mapped[list["SaleUnit"]] = relationship(
        "SaleUnit",
        back_populates="property",
        passive_deletes="all",
    )
    rent_units: Mapped[list["RentUnit"]] = relationship(
        "RentUnit",
        back_populates="property",
        passive_deletes="all",
    )


class Project(Base, IdMixin, TimestampMixin, ListingMixin):
    """A development sold off-plan with an installment plan."""

    __tablename__ = "projects"

    off_plan: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completion_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    agent_id: Mapped[str] = mapped_column(
        ForeignKey("agents.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    agent: Mapped["Agent"] = relationship("Agent", back_populates="projects")
    images: Mapped[list[Image]] = _children("Image")
    amenities: Mapped[list[ListingAmenity]] = _children("ListingAmenity")
    installments: Mapped[list["Installment"]] = relationship(
        "Installment",
        back_populates="project",
        order_by="Installment.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UnitMixin:
    """Columns shared by sale and rent units."""

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    type: Mapped[str] = mapped_column(String(191), nullable=False)
    unit_no: Mapped[str] = mapped_column(String(50), nullable=False)
    floor: Mapped[str] = mapped_column(String(50), nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    parking_count: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class SaleUnit(Base, IdMixin, TimestampMixin, UnitMixin):
    """A unit of a property offered for sale."""

    __tablename__ = "sale_units"

    rp_sqft: Mapped[float] = mapped_column(Float, nullable=False)
    total_price: Mapped[float] = mapped_column(Float, nullable=False)
    property_id: Mapped[str] = mapped_column(
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    property: Mapped[Property] = relationship("Property", back_populates="sale_units")
    images: Mapped[list[Image]] = _children("Image")
    views: Mapped[list[ListingView]] = _children("ListingView")
    favorites: Mapped[list["FavoriteSale"]] = relationship(
        "FavoriteSale",
        back_populates="sale_unit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RentUnit(Base, IdMixin, TimestampMixin, UnitMixin):
    """A unit of a property offered for rent."""

    __tablename__ = "rent_units"

    rent_price: Mapped[float] = mapped_column(Float, nullable=False)
    property_id: Mapped[str] = mapped_column(
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    property: Mapped[Property] = relationship("Property", back_populates="rent_units")
    images: Mapped[list[Image]] = _children("Image")
    views: Mapped[list[ListingView]] = _children("ListingView")
    favorites: Mapped[list["FavoriteRent"]] = relationship(
        "FavoriteRent",
        back_populates="rent_unit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
