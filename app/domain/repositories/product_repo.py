# app/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import uuid
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from app.domain.models.product import Product

logger = logging.getLogger(__name__)

# Catalog iteration order: stable within a process run
_CATALOG_SORT = [("created_at", 1), ("product_id", 1)]


async def _valid_products(cursor) -> List[Product]:
    """Documents that fail validation are logged and skipped, never fatal for the listing."""
    products: List[Product] = []
    async for doc in cursor:
        try:
            products.append(Product.model_validate(doc))
        except ValidationError as e:
            logger.warning("product skipped, invalid document product_id=%s errors=%s", doc.get("product_id"), e.error_count())
    return products

class ProductRepo:
    """
    Product repository backed by the 'products' collection.
    Documents are keyed by `product_id`; Mongo's `_id` is never exposed.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def list_all(self, category: Optional[str] = None) -> List[Product]:
        query: Dict[str, Any] = {"category": category} if category else {}
        cursor = self.col.find(query, {"_id": 0}).sort(_CATALOG_SORT)
        return await _valid_products(cursor)

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        doc = await self.col.find_one({"product_id": product_id}, {"_id": 0})
        return Product.model_validate(doc) if doc else None

    async def get_many_by_product_ids(self, ids: List[str]) -> List[Product]:
        if not ids:
            return []
        cursor = self.col.find({"product_id": {"$in": ids}}, {"_id": 0})
        return await _valid_products(cursor)

    async def create(self, fields: Dict[str, Any]) -> Product:
        product = Product.model_validate({
            **fields,
            "product_id": uuid.uuid4().hex,
            "created_at": datetime.now(timezone.utc),
        })
        await self.col.insert_one(product.model_dump())
        return product

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        """
        Partial update. Returns the updated product, or None if it does not exist.
        """
        changes = {k: v for k, v in fields.items() if k not in ("product_id", "created_at")}
        if changes:
            res = await self.col.update_one({"product_id": product_id}, {"$set": changes}, upsert=False)
            if res.matched_count == 0:
                return None
        return await self.get_by_product_id(product_id)

    async def delete(self, product_id: str) -> bool:
        res = await self.col.delete_one({"product_id": product_id})
        return res.deleted_count > 0
