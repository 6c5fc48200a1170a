"""Menu-related models"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Numeric, Text, CheckConstraint
from sqlalchemy.orm import relationship

from menu_api.database import Base


class Category(Base):
    """Menu sections (Starters, Mains, Drinks...)"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    # The database owns the ON DELETE behaviour, soft-deleted items are never loaded here
    menu_items = relationship("MenuItem", back_populates="category", passive_deletes=True)


class MenuItem(Base):
    """Menu items, soft-deleted through deleted_at"""
    __tablename__ = "menu_items"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500))
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    is_available = Column(Boolean, nullable=False, default=True)
    is_popular = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, index=True)

    # Relationships
    category = relationship("Category", back_populates="menu_items")
    customization_options = relationship(
        "CustomizationOption",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="CustomizationOption.id",
    )


class CustomizationOption(Base):
    """Add-ons and variants for a menu item"""
    __tablename__ = "customization_options"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_customization_options_price_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)  # Extra cheese, Large, Oat milk
    price = Column(Numeric(10, 2), nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    group_name = Column(String(50))  # Size, Toppings, Milk
    is_mutually_exclusive = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menu_item = relationship("MenuItem", back_populates="customization_options")
