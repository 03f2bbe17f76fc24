# app/api/v1/routers/products.py

from fastapi import APIRouter, Depends, Query, HTTPException, Response
from typing import List, Optional
import time

from app.api.deps import product_repo_dep, redis_dep
from app.api.v1.schemas.reco import ProductOut
from app.api.v1.schemas.shop import ProductIn, ProductPatch
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.catalog_svc import (
    list_products_svc,
    create_product_svc,
    update_product_svc,
    delete_product_svc,
)

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products", response_model=List[ProductOut])
async def list_products(
    category: Optional[str] = Query(None, description="Only products of this category"),
    prod_repo: ProductRepo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
):
    t0 = time.perf_counter()
    items = await list_products_svc(prod_repo, redis, category=category)
    logger.info("Response: list_products returned %s items in %.4fs category=%s", len(items), time.perf_counter() - t0, category)
    return [ProductOut.from_product(p) for p in items]


@router.get("/products/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, prod_repo: ProductRepo = Depends(product_repo_dep)):
    product = await prod_repo.get_by_product_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.from_product(product)


# ------- Admin CRUD -------

@router.post("/admin/products", response_model=ProductOut, status_code=201, tags=["admin"])
async def create_product(
    body: ProductIn,
    prod_repo: ProductRepo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
):
    logger.info("Request: create_product name=%s category=%s", body.name, body.category)
    product = await create_product_svc(prod_repo, redis, body.model_dump())
    return ProductOut.from_product(product)


@router.put("/admin/products/{product_id}", response_model=ProductOut, tags=["admin"])
async def update_product(
    product_id: str,
    body: ProductPatch,
    prod_repo: ProductRepo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
):
    fields = body.model_dump(exclude_unset=True)
    logger.info("Request: update_product product_id=%s fields=%s", product_id, sorted(fields))
    product = await update_product_svc(prod_repo, redis, product_id, fields)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.from_product(product)


@router.delete("/admin/products/{product_id}", status_code=204, tags=["admin"])
async def delete_product(
    product_id: str,
    prod_repo: ProductRepo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
):
    logger.info("Request: delete_product product_id=%s", product_id)
    if not await delete_product_svc(prod_repo, redis, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)
