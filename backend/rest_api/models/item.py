"""
Menu Item Models: MenuItem and its ingredients, allergens, dietary tags
and the translation families attached to them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .menu import MenuSection


class MenuItem(TimestampMixin, Base):
    """
    A dish or drink within a section.

    Wine, beer and alcohol columns are only meaningful for the matching
    item types; the item service clears them otherwise.
    """

    __tablename__ = "menu_item"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    section_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_section.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_type: Mapped[str] = mapped_column(String(20), nullable=False, default="food")
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    preparation_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    calories: Mapped[Optional[int]] = mapped_column(Integer)
    weight: Mapped[Optional[str]] = mapped_column(String(50))

    # Drinks
    alcohol_content: Mapped[Optional[float]] = mapped_column(Float)
    serving_format: Mapped[Optional[str]] = mapped_column(String(20))
    volume_ml: Mapped[Optional[int]] = mapped_column(Integer)

    # Wine
    wine_type: Mapped[Optional[str]] = mapped_column(String(30))
    wine_characteristics: Mapped[Optional[list[str]]] = mapped_column(JSON)
    grape_variety: Mapped[Optional[str]] = mapped_column(Text)
    wine_region: Mapped[Optional[str]] = mapped_column(Text)
    wine_producer: Mapped[Optional[str]] = mapped_column(Text)
    vintage: Mapped[Optional[int]] = mapped_column(Integer)

    # Beer
    beer_style: Mapped[Optional[str]] = mapped_column(String(30))
    brewery: Mapped[Optional[str]] = mapped_column(Text)
    ibu: Mapped[Optional[int]] = mapped_column(Integer)

    extra_info: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)

    # Relationships
    section: Mapped["MenuSection"] = relationship(back_populates="items")
    translations: Mapped[list["MenuItemTranslation"]] = relationship(
        back_populates="item", cascade="all, delete-orphan"
    )
    ingredients: Mapped[list["ItemIngredient"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemIngredient.display_order",
    )
    allergens: Mapped[list["ItemAllergen"]] = relationship(
        back_populates="item", cascade="all, delete-orphan"
    )
    dietary_tags: Mapped[list["ItemDietaryTag"]] = relationship(
        back_populates="item", cascade="all, delete-orphan"
    )


class MenuItemTranslation(TimestampMixin, Base):
    """Translated name/description of an item."""

    __tablename__ = "menu_item_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    field_value: Mapped[str] = mapped_column(Text, nullable=False)

    item: Mapped["MenuItem"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint("item_id", "language_code", "field_name", name="uq_menu_item_translation"),
    )


class ItemIngredient(TimestampMixin, Base):
    """Free-text ingredient of an item, in display order."""

    __tablename__ = "item_ingredient"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_main: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    item: Mapped["MenuItem"] = relationship(back_populates="ingredients")
    translations: Mapped[list["ItemIngredientTranslation"]] = relationship(
        back_populates="ingredient", cascade="all, delete-orphan"
    )


class ItemIngredientTranslation(TimestampMixin, Base):
    __tablename__ = "item_ingredient_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    ingredient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item_ingredient.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    ingredient: Mapped["ItemIngredient"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint("ingredient_id", "language_code", name="uq_item_ingredient_translation"),
    )


class ItemAllergen(TimestampMixin, Base):
    """An allergen code (EU 14) declared on an item."""

    __tablename__ = "item_allergen"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    allergen_code: Mapped[str] = mapped_column(String(30), nullable=False)

    item: Mapped["MenuItem"] = relationship(back_populates="allergens")
    translations: Mapped[list["ItemAllergenTranslation"]] = relationship(
        back_populates="allergen", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("item_id", "allergen_code", name="uq_item_allergen"),
    )


class ItemAllergenTranslation(TimestampMixin, Base):
    __tablename__ = "item_allergen_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    allergen_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item_allergen.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)

    allergen: Mapped["ItemAllergen"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint("allergen_id", "language_code", name="uq_item_allergen_translation"),
    )


class ItemDietaryTag(TimestampMixin, Base):
    __tablename__ = "item_dietary_tag"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag_code: Mapped[str] = mapped_column(String(30), nullable=False)

    item: Mapped["MenuItem"] = relationship(back_populates="dietary_tags")
    translations: Mapped[list["DietaryTagTranslation"]] = relationship(
        back_populates="tag", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("item_id", "tag_code", name="uq_item_dietary_tag"),
    )


class DietaryTagTranslation(TimestampMixin, Base):
    __tablename__ = "dietary_tag_translation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tag_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item_dietary_tag.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)

    tag: Mapped["ItemDietaryTag"] = relationship(back_populates="translations")

    __table_args__ = (
        UniqueConstraint("tag_id", "language_code", name="uq_dietary_tag_translation"),
    )
