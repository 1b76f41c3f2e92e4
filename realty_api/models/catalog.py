"""Title-only lookup tables used to classify listings."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from realty_api.models.base import Base, IdMixin, TimestampMixin


class Category(Base, IdMixin, TimestampMixin):
    """Listing category such as ``Luxury`` or ``Off Plan``."""

    __tablename__ = "categories"

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)


class PropertyType(Base, IdMixin, TimestampMixin):
    """Building or unit type such as ``Apartment`` or ``Villa``."""

    __tablename__ = "types"

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)


class View(Base, IdMixin, TimestampMixin):
    """A view a unit can offer, e.g. ``Sea View``."""

    __tablename__ = "views"

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)


class Amenity(Base, IdMixin, TimestampMixin):
    """A facility offered by a property or project, e.g. ``Gym``."""

    __tablename__ = "amenities"

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
