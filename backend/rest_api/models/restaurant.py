"""
Restaurant Models: Restaurant, RestaurantTranslation, RestaurantSocial, RestaurantMenu.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .user import User
    from .menu import Menu


class Restaurant(TimestampMixin, Base):
    """
    A venue owned by one user. The type selects the section presets
    offered when a menu is created for it.
    """

    __tablename__ = "restaurant"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    street: Mapped[Optional[str]] = mapped_column(Text)
    city: Mapped[Optional[str]] = mapped_column(Text)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20))
    country: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="restaurants")
    translations: Mapped[list["RestaurantTranslation"]] = relationship(
        back_populates="restaurant", cascade="all, delete-orphan"
    )
    socials: Mapped[list["RestaurantSocial"]] = relationship(
        back_populates="restaurant", cascade="all, delete-orphan", order_by="RestaurantSocial.platform"
    )
    menu_links: Mapped[list["RestaurantMenu"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="RestaurantMenu.display_order",
    )


class RestaurantTranslation(TimestampMixin, Base):
    """Translated description/about text of a restaurant."""

    __tablename__ = "restaurant_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    restaurant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    field_value: Mapped[str] = mapped_column(Text, nullable=False)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint(
            "restaurant_id", "language_code", "field_name", name="uq_restaurant_translation"
        ),
    )


class RestaurantSocial(TimestampMixin, Base):
    """One social handle per platform per restaurant."""

    __tablename__ = "restaurant_social"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    restaurant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    platform: Mapped[str] = mapped_column(String(30), nullable=False)
    handle: Mapped[str] = mapped_column(Text, nullable=False)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="socials")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "platform", name="uq_restaurant_social_platform"),
    )


class RestaurantMenu(TimestampMixin, Base):
    """
    Attachment of a menu to a restaurant.
    At most one attachment per restaurant may be primary.
    """

    __tablename__ = "restaurant_menu"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    restaurant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    restaurant: Mapped["Restaurant"] = relationship(back_populates="menu_links")
    menu: Mapped["Menu"] = relationship(back_populates="restaurant_links")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "menu_id", name="uq_restaurant_menu"),
        # Partial unique index: one primary menu per restaurant
        Index(
            "uq_restaurant_menu_primary",
            "restaurant_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary"),
        ),
    )
