# app/domain/repositories/wishlist_repo.py

from __future__ import annotations
from typing import List
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.domain.models.shop import WishlistItem, line_id

class WishlistRepo:
    """Wishlist entries in 'wishlists', `_id` = "{user_id}_{product_id}"."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "wishlists"):
        self.col = db[collection_name]

    async def list_by_user(self, user_id: str) -> List[WishlistItem]:
        cursor = self.col.find({"user_id": user_id}, {"_id": 0}).sort("added_at", 1)
        return [WishlistItem.model_validate(doc) async for doc in cursor]

    async def add(self, user_id: str, product_id: str) -> WishlistItem:
        item = WishlistItem(user_id=user_id, product_id=product_id, added_at=datetime.now(timezone.utc))
        # $setOnInsert keeps the first added_at when the product is wishlisted twice
        await self.col.update_one(
            {"_id": line_id(user_id, product_id)},
            {"$setOnInsert": item.model_dump()},
            upsert=True,
        )
        return item

    async def remove(self, user_id: str, product_id: str) -> bool:
        res = await self.col.delete_one({"_id": line_id(user_id, product_id)})
        return res.deleted_count > 0
