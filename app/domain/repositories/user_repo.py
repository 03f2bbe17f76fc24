# app/domain/repositories/user_repo.py

from __future__ import annotations
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from pymongo import ReturnDocument
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.domain.models.shop import UserProfile

class UserRepo:
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "users"):
        self.col = db[collection_name]

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        doc = await self.col.find_one({"user_id": user_id}, {"_id": 0})
        return UserProfile.model_validate(doc) if doc else None

    async def upsert_profile(self, user_id: str, fields: Dict[str, Any]) -> UserProfile:
        changes = {k: v for k, v in fields.items() if k != "user_id"}
        changes["updated_at"] = datetime.now(timezone.utc)
        doc = await self.col.find_one_and_update(
            {"user_id": user_id},
            {"$set": changes, "$setOnInsert": {"user_id": user_id}},
            projection={"_id": 0},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return UserProfile.model_validate(doc)
