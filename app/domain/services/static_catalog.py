"""Hardcoded products served when nothing real can be recommended."""

from typing import List

from app.domain.models.product import Product

_PLACEHOLDER_IMAGE = "/placeholder.svg?height=300&width=300"

# Served when a dependency (AI key, database, catalog) is missing
DEMO_PRODUCTS: List[Product] = [
    Product(
        product_id="rec_1",
        name="AI Recommended Headphones",
        description="Based on your browsing history - Premium wireless headphones with superior sound quality",
        price=179.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Electronics",
    ),
    Product(
        product_id="rec_2",
        name="Smart Fitness Tracker",
        description="Perfect for your active lifestyle - Advanced health monitoring with GPS tracking",
        price=249.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Fitness",
    ),
    Product(
        product_id="rec_3",
        name="Eco-Friendly Water Bottle",
        description="Sustainable choice for hydration - Made from recycled materials with temperature control",
        price=34.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Lifestyle",
    ),
    Product(
        product_id="rec_4",
        name="Wireless Charging Station",
        description="Convenient charging solution - Multi-device wireless charger for your desk",
        price=89.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Electronics",
    ),
]

# Served when the resolver itself fails unexpectedly
SERVICE_FALLBACK_PRODUCTS: List[Product] = [
    Product(
        product_id="fallback_1",
        name="Popular Wireless Headphones",
        description="Top-rated wireless headphones with excellent sound quality and long battery life",
        price=159.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Electronics",
    ),
    Product(
        product_id="fallback_2",
        name="Bestselling Smartwatch",
        description="Feature-rich smartwatch for fitness tracking and smart notifications",
        price=299.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Electronics",
    ),
    Product(
        product_id="fallback_3",
        name="Premium Coffee Maker",
        description="Professional-grade coffee maker for the perfect brew every time",
        price=199.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Kitchen",
    ),
    Product(
        product_id="fallback_4",
        name="Ergonomic Office Chair",
        description="Comfortable office chair designed for long work sessions",
        price=349.99,
        image_url=_PLACEHOLDER_IMAGE,
        category="Furniture",
    ),
]
