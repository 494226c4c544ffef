"""Seed the inventory with common phone repair parts and accessories."""

from database import create_session_factory, init_db
from schemas.entities import Category, InventoryItemCreate
from storage import build_storage

SEED_DATA = [
    # Screens
    {"name": "iPhone 12 Screen",          "category": Category.SCREEN,    "brand": "Apple",   "model": "iPhone 12",  "quantity": 6,  "price": 89.00,  "min_stock": 2},
    {"name": "iPhone 13 Screen",          "category": Category.SCREEN,    "brand": "Apple",   "model": "iPhone 13",  "quantity": 5,  "price": 109.00, "min_stock": 2},
    {"name": "Galaxy S21 Screen",         "category": Category.SCREEN,    "brand": "Samsung", "model": "Galaxy S21", "quantity": 4,  "price": 120.00, "min_stock": 2},
    {"name": "Galaxy A52 Screen",         "category": Category.SCREEN,    "brand": "Samsung", "model": "Galaxy A52", "quantity": 8,  "price": 55.00,  "min_stock": 3},
    {"name": "Redmi Note 10 Screen",      "category": Category.SCREEN,    "brand": "Xiaomi",  "model": "Note 10",    "quantity": 5,  "price": 40.00,  "min_stock": 2},

    # Batteries
    {"name": "iPhone 11 Battery",         "category": Category.BATTERY,   "brand": "Apple",   "model": "iPhone 11",  "quantity": 10, "price": 29.00,  "min_stock": 3},
    {"name": "iPhone 12 Battery",         "category": Category.BATTERY,   "brand": "Apple",   "model": "iPhone 12",  "quantity": 8,  "price": 32.00,  "min_stock": 3},
    {"name": "Galaxy S20 Battery",        "category": Category.BATTERY,   "brand": "Samsung", "model": "Galaxy S20", "quantity": 6,  "price": 27.00,  "min_stock": 2},
    {"name": "Moto G9 Battery",           "category": Category.BATTERY,   "brand": "Motorola", "model": "Moto G9",   "quantity": 4,  "price": 18.00,  "min_stock": 2},

    # Accessories
    {"name": "USB-C Cable 1m",            "category": Category.ACCESSORY, "quantity": 40, "price": 6.00,  "min_stock": 10},
    {"name": "Lightning Cable 1m",        "category": Category.ACCESSORY, "quantity": 30, "price": 8.00,  "min_stock": 10},
    {"name": "20W USB-C Charger",         "category": Category.ACCESSORY, "quantity": 15, "price": 15.00, "min_stock": 5},
    {"name": "Tempered Glass Protector",  "category": Category.ACCESSORY, "quantity": 60, "price": 4.00,  "min_stock": 15},
    {"name": "Silicone Case",             "category": Category.ACCESSORY, "quantity": 25, "price": 9.00,  "min_stock": 8},
    {"name": "Car Phone Mount",           "category": Category.ACCESSORY, "quantity": 6,  "price": 12.00, "min_stock": 3},
]


def seed():
    session_factory = create_session_factory()
    if session_factory is not None and not init_db(session_factory):
        session_factory = None
    storage = build_storage(session_factory=session_factory)

    existing = {item.name for item in storage.inventory.get_all()}
    added = 0
    skipped = 0

    for item in SEED_DATA:
        if item["name"] in existing:
            skipped += 1
            continue
        storage.inventory.add(InventoryItemCreate(**item))
        added += 1

    target = "remote database" if storage.remote.enabled else "local store"
    print(f"✅ Inventory seeded into {target}: {added} added, {skipped} already existed.")


if __name__ == "__main__":
    seed()
