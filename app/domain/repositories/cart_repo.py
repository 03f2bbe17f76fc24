# app/domain/repositories/cart_repo.py

from __future__ import annotations
from typing import List
from datetime import datetime, timezone
from pymongo import ReturnDocument
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.domain.models.shop import CartItem, line_id

class CartRepo:
    """Cart lines in 'carts', `_id` = "{user_id}_{product_id}"."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "carts"):
        self.col = db[collection_name]

    async def list_by_user(self, user_id: str) -> List[CartItem]:
        cursor = self.col.find({"user_id": user_id}, {"_id": 0}).sort("added_at", 1)
        return [CartItem.model_validate(doc) async for doc in cursor]

    async def add(self, user_id: str, product_id: str, quantity: int = 1) -> CartItem:
        """Insert the line or bump its quantity."""
        doc = await self.col.find_one_and_update(
            {"_id": line_id(user_id, product_id)},
            {
                "$inc": {"quantity": quantity},
                "$setOnInsert": {
                    "user_id": user_id,
                    "product_id": product_id,
                    "added_at": datetime.now(timezone.utc),
                },
            },
            projection={"_id": 0},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return CartItem.model_validate(doc)

    async def remove(self, user_id: str, product_id: str) -> bool:
        res = await self.col.delete_one({"_id": line_id(user_id, product_id)})
        return res.deleted_count > 0

    async def remove_many(self, user_id: str, product_ids: List[str]) -> int:
        """Delete only the given lines; lines added meanwhile are kept."""
        if not product_ids:
            return 0
        res = await self.col.delete_many({"_id": {"$in": [line_id(user_id, pid) for pid in product_ids]}})
        return res.deleted_count
