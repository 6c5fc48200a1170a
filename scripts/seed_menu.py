#!/usr/bin/env python3
"""
Seed script to create a demo menu
"""

import asyncio
from decimal import Decimal


MENU = {
    ("Pizza", "Stone oven pizzas"): [
        {"name": "Margherita", "price": "11.50", "is_popular": True},
        {"name": "Diavola", "price": "13.00"},
        {"name": "Quattro Formaggi", "price": "13.50"},
    ],
    ("Pasta", "Fresh pasta made daily"): [
        {"name": "Spaghetti Carbonara", "price": "12.00", "is_popular": True},
        {"name": "Penne Arrabbiata", "price": "10.50"},
    ],
    ("Drinks", None): [
        {"name": "Lemonade", "price": "3.50"},
        {"name": "Espresso", "price": "2.20"},
    ],
}


async def seed_menu():
    """Seed demo data for development"""
    from sqlalchemy import select

    from menu_api.config import get_settings
    from menu_api.database import Base, build_engine, build_session_factory
    from menu_api.models.menu import Category, CustomizationOption, MenuItem

    engine = build_engine(get_settings())
    session_factory = build_session_factory(engine)

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as db:
        result = await db.execute(select(Category).where(Category.name == "Pizza"))
        if result.scalar_one_or_none():
            print("Demo menu already exists. Skipping...")
            await engine.dispose()
            return

        item_count = 0
        for order, ((name, description), items) in enumerate(MENU.items()):
            category = Category(name=name, description=description, display_order=order)
            db.add(category)
            await db.flush()

            for item_data in items:
                item = MenuItem(
                    category_id=category.id,
                    name=item_data["name"],
                    price=Decimal(item_data["price"]),
                    is_popular=item_data.get("is_popular", False),
                )

                # Sizes for pizzas
                if name == "Pizza":
                    item.customization_options = [
                        CustomizationOption(name="Regular", price=Decimal("0"), group_name="Size", is_mutually_exclusive=True),
                        CustomizationOption(name="Large", price=Decimal("3.00"), group_name="Size", is_mutually_exclusive=True),
                        CustomizationOption(name="Extra mozzarella", price=Decimal("1.50"), group_name="Extras"),
                    ]
                db.add(item)
                item_count += 1

        await db.commit()

    await engine.dispose()
    print(f"Demo menu created: {len(MENU)} categories, {item_count} items")


if __name__ == "__main__":
    asyncio.run(seed_menu())
