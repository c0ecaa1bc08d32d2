"""
Owner account model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .restaurant import Restaurant
    from .menu import Menu


class User(TimestampMixin, Base):
    """
    A restaurant owner. Owns restaurants and menus; everything below a
    menu is owned transitively.
    """

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    full_name: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    restaurants: Mapped[list["Restaurant"]] = relationship(back_populates="owner")
    menus: Mapped[list["Menu"]] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
