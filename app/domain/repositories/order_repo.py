# app/domain/repositories/order_repo.py

from __future__ import annotations
from typing import List
from datetime import datetime, timezone
import uuid
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.domain.models.shop import Order, OrderLine

class OrderRepo:
    """Orders backed by the 'orders' collection, one document per checkout."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "orders"):
        self.col = db[collection_name]

    async def list_by_user(self, user_id: str) -> List[Order]:
        cursor = self.col.find({"user_id": user_id}, {"_id": 0}).sort("created_at", -1)
        return [Order.model_validate(doc) async for doc in cursor]

    async def create(self, user_id: str, lines: List[OrderLine]) -> Order:
        total = round(sum(line.price * line.quantity for line in lines), 2)
        order = Order(
            order_id=uuid.uuid4().hex,
            user_id=user_id,
            items=lines,
            total=total,
            created_at=datetime.now(timezone.utc),
        )
        await self.col.insert_one(order.model_dump())
        return order
