# scripts/seed_restaurants.py
import asyncio
from db.db_operation import create_indexes, mongo_conn
from models.restaurant import Category, GeoPoint, MenuItem, Restaurant
from utils.jwt_handler import create_access_token

SAMPLE_RESTAURANTS = [
    Restaurant(
        id="spice-garden",
        name="Spice Garden",
        address="12 MG Road, Bengaluru",
        location=GeoPoint(coordinates=[77.6066, 12.9756]),
        is_approved=True,
        owner_id="owner-spice-garden",
        categories=[
            Category(name="Mains", items=[
                MenuItem(id="sg-paneer-tikka", name="Paneer Tikka", price=220, vegetarian=True),
                MenuItem(id="sg-butter-chicken", name="Butter Chicken", price=280),
            ]),
            Category(name="Breads", items=[
                MenuItem(id="sg-garlic-naan", name="Garlic Naan", price=60, vegetarian=True),
            ]),
        ],
    ),
    Restaurant(
        id="dosa-corner",
        name="Dosa Corner",
        address="4 Church Street, Bengaluru",
        is_approved=True,
        owner_id="owner-dosa-corner",
        categories=[
            Category(name="Dosas", items=[
                MenuItem(id="dc-masala-dosa", name="Masala Dosa", price=90, vegetarian=True),
            ]),
        ],
    ),
]

async def seed():
    restaurants = mongo_conn.restaurants_collection
    await create_indexes()
    for restaurant in SAMPLE_RESTAURANTS:
        await restaurants.replace_one({"id": restaurant.id}, restaurant.model_dump(), upsert=True)
        print("Seeded restaurant:", restaurant.id)

    print("customer token:", create_access_token({"sub": "customer-1", "email": "customer@example.com", "role": "customer"}))
    print("owner token:", create_access_token({"sub": "owner-spice-garden", "email": "owner@example.com",
                                               "role": "restaurant_owner", "restaurant_id": "spice-garden"}))
    print("admin token:", create_access_token({"sub": "admin-1", "email": "admin@example.com", "role": "admin"}))

if __name__ == "__main__":
    asyncio.run(seed())
