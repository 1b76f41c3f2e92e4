"""Agent model for the sales contacts attached to listings."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from realty_api.models.listing import Project, Property


class Agent(Base, IdMixin, TimestampMixin):
    """Represents the agent responsible for properties and projects.

    Attributes:
        id: Primary key identifier.
        name: Display name, unique across agents.
        email: Contact e-mail address.
        phone: Contact phone number.
        image_url: Public URL of the agent picture.
        properties: Properties handled by the agent.
        projects: Projects handled by the agent.
    """

    __tablename__ = "agents"

    name: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    properties: Mapped[list["Property"]] = relationship(
        "Property",
        back_populates="agent",
        passive_deletes="all",
    )
    projects: Mapped[list["Project"]] = relationship(
        "Project",
        back_populates="agent",
        passive_deletes="all",
    )
