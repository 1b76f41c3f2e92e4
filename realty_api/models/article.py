"""Editorial articles published alongside the listings."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from realty_api.models.base import Base, IdMixin, TimestampMixin
from realty_api.models.media import Image


class Article(Base, IdMixin, TimestampMixin):
    """A blog article with an ordered image gallery."""

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    images: Mapped[list[Image]] = relationship(
        "Image",
        order_by="Image.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
