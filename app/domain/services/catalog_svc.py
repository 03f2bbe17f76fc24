import time
import logging
from typing import Any, Dict, List, Optional

from app.core.config import get_settings
from app.domain.models.product import Product
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.product_list_cache_repo import ProductListCacheRepo

logger = logging.getLogger(__name__)


async def list_products_svc(
    prod_repo: ProductRepo,
    redis,
    category: Optional[str] = None,
) -> List[Product]:
    """
    Catalog listing, served from Redis when possible.
    Redis is optional: a missing client or any cache error falls through to Mongo.
    """
    start_time = time.perf_counter()
    settings = get_settings()
    cache = ProductListCacheRepo(redis) if redis is not None else None
    cache_key = cache.key({"category": category}) if cache else None

    if cache:
        try:
            if cached := await cache.get(cache_key):
                logger.info("catalog cache_hit key=%s items=%s", cache_key, len(cached))
                return cached
        except Exception as e:
            logger.warning("catalog redis.get error key=%s err=%s", cache_key, e)
        logger.info("catalog cache_miss key=%s", cache_key)

    db_t0 = time.perf_counter()
    items = await prod_repo.list_all(category=category)
    logger.info("catalog db_ok items=%s db_time=%.3fs", len(items), time.perf_counter() - db_t0)

    if cache:
        try:
            await cache.set(cache_key, items, ttl=settings.product_list_cache_ttl)
            logger.debug("catalog cache_set key=%s ttl=%ds", cache_key, settings.product_list_cache_ttl)
        except Exception as e:
            logger.warning("catalog redis.set error key=%s err=%s", cache_key, e)

    logger.info("catalog done items=%s total_time=%.3fs", len(items), time.perf_counter() - start_time)
    return items


async def invalidate_catalog_cache(redis) -> None:
    """Called after every admin write; cache errors are logged, never raised."""
    if redis is None:
        return
    try:
        n = await ProductListCacheRepo(redis).invalidate_all()
        logger.info("catalog cache invalidated keys=%s", n)
    except Exception as e:
        logger.warning("catalog cache invalidation failed err=%s", e)


async def create_product_svc(prod_repo: ProductRepo, redis, fields: Dict[str, Any]) -> Product:
    product = await prod_repo.create(fields)
    logger.info("catalog created product_id=%s name=%s", product.product_id, product.name)
    await invalidate_catalog_cache(redis)
    return product


async def update_product_svc(prod_repo: ProductRepo, redis, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
    product = await prod_repo.update(product_id, fields)
    if product is None:
        logger.warning("catalog update: product not found product_id=%s", product_id)
        return None
    logger.info("catalog updated product_id=%s fields=%s", product_id, sorted(fields))
    await invalidate_catalog_cache(redis)
    return product


async def delete_product_svc(prod_repo: ProductRepo, redis, product_id: str) -> bool:
    deleted = await prod_repo.delete(product_id)
    if deleted:
        logger.info("catalog deleted product_id=%s", product_id)
        await invalidate_catalog_cache(redis)
    return deleted
