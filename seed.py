"""
Seed script -- writes a sample catalog snapshot for local runs.

Usage:
    python seed.py [catalog.json]
    CATALOG_FILE=catalog.json uvicorn main:app --reload

Creates:
  - 4 facilities around lower Manhattan (one inactive hub)
  - 7 product names
  - 2 variants of "Product A"
"""

import sys
from pathlib import Path

from src.api.schemas import CatalogPayload

DEFAULT_OUTPUT = Path("catalog.json")

FACILITIES = [
    {
        "id": "1",
        "name": "Central Warehouse",
        "type": "warehouse",
        "address": "123 Main St, Downtown",
        "coordinates": {"lat": 40.7128, "lng": -74.0060},
        "radius_meters": 5000,
        "is_active": True,
        "products": ["Product A", "Product B", "Product C"],
        "capacity": 1000,
        "current_load": 750,
        "avg_delivery_time_minutes": 25,
    },
    {
        "id": "2",
        "name": "North Distribution Center",
        "type": "distribution",
        "address": "456 North Ave, Uptown",
        "coordinates": {"lat": 40.7580, "lng": -73.9855},
        "radius_meters": 3000,
        "is_active": True,
        "products": ["Product A", "Product D", "Product E"],
        "capacity": 800,
        "current_load": 600,
        "avg_delivery_time_minutes": 20,
    },
    {
        "id": "3",
        "name": "East Store",
        "type": "store",
        "address": "789 East St, Eastside",
        "coordinates": {"lat": 40.7282, "lng": -73.9942},
        "radius_meters": 2000,
        "is_active": True,
        "products": ["Product B", "Product C", "Product F"],
        "capacity": 500,
        "current_load": 300,
        "avg_delivery_time_minutes": 15,
    },
    {
        "id": "4",
        "name": "South Hub",
        "type": "hub",
        "address": "321 South Blvd, Southside",
        "coordinates": {"lat": 40.6982, "lng": -74.0178},
        "radius_meters": 4000,
        "is_active": False,
        "products": ["Product A", "Product G"],
        "capacity": 1200,
        "current_load": 0,
    },
]

PRODUCTS = [f"Product {letter}" for letter in "ABCDEFG"]

VARIANTS = [
    {"id": "var-1", "product_name": "Product A", "title": "Red - Size M", "sku": "PA-RED-M"},
    {"id": "var-2", "product_name": "Product A", "title": "Blue - Size L", "sku": "PA-BLUE-L"},
]


def build_catalog() -> CatalogPayload:
    return CatalogPayload.model_validate(
        {"facilities": FACILITIES, "products": PRODUCTS, "variants": VARIANTS}
    )


def main(argv: list[str]) -> None:
    output = Path(argv[1]) if len(argv) > 1 else DEFAULT_OUTPUT
    catalog = build_catalog()
    output.write_text(catalog.model_dump_json(indent=2), encoding="utf-8")
    print(f"  Wrote {len(catalog.facilities)} facilities to {output}")
    print("\nSeed complete!")


if __name__ == "__main__":
    main(sys.argv)
