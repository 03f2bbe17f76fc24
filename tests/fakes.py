"""In-memory stand-ins for the Mongo repositories, the Gemini ranker and Redis."""
import asyncio
import fnmatch
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.domain.models.product import Product
from app.domain.models.shop import CartItem, Order, OrderLine, UserProfile, WishlistItem


class FakeProductRepo:
    def __init__(self, products=None, fail: Optional[Exception] = None):
        self.products: List[Product] = list(products or [])
        self.fail = fail
        self.list_calls = 0

    async def list_all(self, category=None):
        self.list_calls += 1
        if self.fail:
            raise self.fail
        return [p for p in self.products if category is None or p.category == category]

    async def get_by_product_id(self, product_id):
        return next((p for p in self.products if p.product_id == product_id), None)

    async def get_many_by_product_ids(self, ids):
        return [p for p in self.products if p.product_id in set(ids)]

    async def create(self, fields):
        product = Product.model_validate({**fields, "product_id": uuid.uuid4().hex})
        self.products.append(product)
        return product

    async def update(self, product_id, fields):
        current = await self.get_by_product_id(product_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        self.products = [updated if p.product_id == product_id else p for p in self.products]
        return updated

    async def delete(self, product_id):
        before = len(self.products)
        self.products = [p for p in self.products if p.product_id != product_id]
        return len(self.products) < before


class FakeOrderRepo:
    def __init__(self, orders=None, fail: Optional[Exception] = None):
        self.orders: List[Order] = list(orders or [])
        self.fail = fail

    async def list_by_user(self, user_id):
        if self.fail:
            raise self.fail
        return [o for o in reversed(self.orders) if o.user_id == user_id]

    async def create(self, user_id, lines):
        order = Order(
            order_id=uuid.uuid4().hex,
            user_id=user_id,
            items=lines,
            total=round(sum(l.price * l.quantity for l in lines), 2),
            created_at=datetime.now(timezone.utc),
        )
        self.orders.append(order)
        return order


class FakeWishlistRepo:
    def __init__(self, items=None, fail: Optional[Exception] = None):
        self.items: List[WishlistItem] = list(items or [])
        self.fail = fail

    async def list_by_user(self, user_id):
        if self.fail:
            raise self.fail
        return [i for i in self.items if i.user_id == user_id]

    async def add(self, user_id, product_id):
        for i in self.items:
            if i.user_id == user_id and i.product_id == product_id:
                return i
        item = WishlistItem(user_id=user_id, product_id=product_id)
        self.items.append(item)
        return item

    async def remove(self, user_id, product_id):
        before = len(self.items)
        self.items = [i for i in self.items if not (i.user_id == user_id and i.product_id == product_id)]
        return len(self.items) < before


class FakeCartRepo:
    def __init__(self, items=None):
        self.items: Dict[tuple, CartItem] = {(i.user_id, i.product_id): i for i in (items or [])}

    async def list_by_user(self, user_id):
        return [i for (uid, _), i in self.items.items() if uid == user_id]

    async def add(self, user_id, product_id, quantity=1):
        current = self.items.get((user_id, product_id))
        qty = (current.quantity if current else 0) + quantity
        item = CartItem(user_id=user_id, product_id=product_id, quantity=qty)
        self.items[(user_id, product_id)] = item
        return item

    async def remove(self, user_id, product_id):
        return self.items.pop((user_id, product_id), None) is not None

    async def remove_many(self, user_id, product_ids):
        return sum(1 for pid in product_ids if self.items.pop((user_id, pid), None) is not None)


class FakeUserRepo:
    def __init__(self):
        self.profiles: Dict[str, UserProfile] = {}

    async def get_profile(self, user_id):
        return self.profiles.get(user_id)

    async def upsert_profile(self, user_id, fields):
        current = self.profiles.get(user_id) or UserProfile(user_id=user_id)
        profile = current.model_copy(update={**fields, "updated_at": datetime.now(timezone.utc)})
        self.profiles[user_id] = profile
        return profile


class FakeRanker:
    """Returns canned ids, raises, or stalls; records every call."""

    def __init__(self, ids=None, error: Optional[Exception] = None, delay: float = 0.0):
        self.ids = ids or []
        self.error = error
        self.delay = delay
        self.calls = []

    async def rank(self, interacted, catalog, limit):
        self.calls.append({"interacted": list(interacted), "catalog": list(catalog), "limit": limit})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.ids)


class FakeRedis:
    """Subset of redis.asyncio.Redis used by the listing cache."""

    def __init__(self):
        self.store: Dict[str, str] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        return True

    async def delete(self, *keys):
        return sum(1 for k in keys if self.store.pop(k, None) is not None)

    async def scan_iter(self, match="*"):
        for k in list(self.store):
            if fnmatch.fnmatch(k, match):
                yield k


class BrokenRedis(FakeRedis):
    async def get(self, key):
        raise ConnectionError("redis down")

    async def set(self, key, value, ex=None):
        raise ConnectionError("redis down")


