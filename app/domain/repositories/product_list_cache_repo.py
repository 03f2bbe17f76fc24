from typing import Optional, Iterable
from app.domain.models.product import Product
import hashlib
import json

def _h(filters) -> str:
    """
    Create a short hash based on listing filters.
    Used to generate unique cache keys for different query parameters.
    """
    s = json.dumps({"f": filters or {}}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(s.encode()).hexdigest()[:10]

class ProductListCacheRepo:
    """
    Adapter for caching catalog listings in Redis.
    Stores and retrieves lists of Product objects. No business logic here.
    """
    def __init__(self, redis, key_prefix: str = "catalog"):
        self.cache = redis
        self.prefix = key_prefix

    def key(self, filt) -> str:
        return f"{self.prefix}:{_h(filt)}"

    async def get(self, key: str) -> Optional[list[Product]]:
        """
        Retrieve a listing from cache by key.
        Returns None if not found.
        """
        raw = await self.cache.get(key)
        if raw:
            data = json.loads(raw)
            return [Product.model_validate(x) for x in data]
        return None

    async def set(self, key: str, items: Iterable[Product], ttl: int) -> None:
        payload = [i.model_dump(mode="json") for i in items]
        await self.cache.set(key, json.dumps(payload), ex=ttl)

    async def invalidate_all(self) -> int:
        """Drop every cached listing (any filter). Returns keys deleted."""
        keys = [k async for k in self.cache.scan_iter(match=f"{self.prefix}:*")]
        if not keys:
            return 0
        return await self.cache.delete(*keys)
