# app/api/deps.py
from functools import lru_cache
from typing import Optional
from fastapi import Depends, HTTPException
from app.core.config import get_settings
from app.db.mongo import get_db
from app.db.redis import get_redis
from app.domain.repositories.cart_repo import CartRepo
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.user_repo import UserRepo
from app.domain.repositories.wishlist_repo import WishlistRepo
from app.domain.services.ai_ranker_svc import GeminiRanker, ranker_from_settings
from app.domain.services.recommendation_svc import RecommendationResolver

# MongoDB database, or None when not connected
async def mongo_db(db = Depends(get_db)):
    return db

# Redis client, or None when not configured
def redis_dep():
    return get_redis()

# CRUD routes cannot degrade: no database means 503
def require_db(db = Depends(mongo_db)):
    if db is None:
        raise HTTPException(status_code=503, detail="Database not available")
    return db

def product_repo_dep(db = Depends(require_db)) -> ProductRepo:
    return ProductRepo(db)

def cart_repo_dep(db = Depends(require_db)) -> CartRepo:
    return CartRepo(db)

def wishlist_repo_dep(db = Depends(require_db)) -> WishlistRepo:
    return WishlistRepo(db)

def order_repo_dep(db = Depends(require_db)) -> OrderRepo:
    return OrderRepo(db)

def user_repo_dep(db = Depends(require_db)) -> UserRepo:
    return UserRepo(db)

@lru_cache
def ai_ranker_dep() -> Optional[GeminiRanker]:
    # Built once per process from startup settings
    return ranker_from_settings(get_settings())

def recommendation_resolver_dep(
    db = Depends(mongo_db),
    ranker: Optional[GeminiRanker] = Depends(ai_ranker_dep),
) -> RecommendationResolver:
    settings = get_settings()
    return RecommendationResolver(
        products=ProductRepo(db) if db is not None else None,
        orders=OrderRepo(db) if db is not None else None,
        wishlist=WishlistRepo(db) if db is not None else None,
        ranker=ranker,
        limit=settings.recommendation_limit,
        ai_timeout_s=settings.gemini_timeout_s,
    )
