"""Installment plan rows for projects and properties."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from realty_api.models.listing import Project, Property


class Installment(Base, IdMixin, TimestampMixin):
    """One step of a payment plan.

    Attributes:
        title: Milestone label, e.g. ``On Booking``.
        percentage: Share of the price due at this milestone.
        project_id: Owning project, if any.
        property_id: Owning property, if any.
    """

    __tablename__ = "installments"

    title: Mapped[str] = mapped_column(String(191), nullable=False)
    percentage: Mapped[float] = mapped_column(Float, nullable=False)
    project_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    property_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    project: Mapped[Optional["Project"]] = relationship(
        "Project", back_populates="installments"
    )
    property: Mapped[Optional["Property"]] = relationship(
        "Property", back_populates="installments"
    )
