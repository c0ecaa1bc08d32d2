"""
Menu Models: Menu, MenuSection, MenuSectionTranslation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .user import User
    from .restaurant import RestaurantMenu
    from .item import MenuItem


class Menu(TimestampMixin, Base):
    """
    A menu owned by a user, attachable to several restaurants.
    Menu name and description have no translation table.
    """

    __tablename__ = "menu"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="menus")
    sections: Mapped[list["MenuSection"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MenuSection.display_order",
    )
    restaurant_links: Mapped[list["RestaurantMenu"]] = relationship(
        back_populates="menu", cascade="all, delete-orphan"
    )


class MenuSection(TimestampMixin, Base):
    """Ordered group of items within a menu."""

    __tablename__ = "menu_section"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    menu_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(String(50))
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    menu: Mapped["Menu"] = relationship(back_populates="sections")
    translations: Mapped[list["MenuSectionTranslation"]] = relationship(
        back_populates="section", cascade="all, delete-orphan"
    )
    items: Mapped[list["MenuItem"]] = relationship(
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="MenuItem.display_order",
    )


class MenuSectionTranslation(TimestampMixin, Base):
    """Translated name/description of a section."""

    __tablename__ = "menu_section_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    section_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_section.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    field_value: Mapped[str] = mapped_column(Text, nullable=False)

    section: Mapped["MenuSection"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint(
            "section_id", "language_code", "field_name", name="uq_menu_section_translation"
        ),
    )
