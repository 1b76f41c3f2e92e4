"""Contact form submissions."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from realty_api.models.base import Base, IdMixin, TimestampMixin


class Message(Base, IdMixin, TimestampMixin):
    """A message left through the public contact form."""

    __tablename__ = "messages"

    name: Mapped[str] = mapped_column(String(191), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[str] = mapped_column(String(191), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
