from fastapi import APIRouter, Depends, HTTPException, Response
from app.api.deps import product_repo_dep, wishlist_repo_dep
from app.api.v1.schemas.reco import ProductOut
from app.api.v1.schemas.shop import WishlistAddIn, WishlistOut
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.wishlist_repo import WishlistRepo

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/wishlist", tags=["wishlist"])


@router.get("", response_model=WishlistOut)
async def get_wishlist(
    user_id: str,
    wishlist_repo: WishlistRepo = Depends(wishlist_repo_dep),
    prod_repo: ProductRepo = Depends(product_repo_dep),
):
    entries = await wishlist_repo.list_by_user(user_id)
    products = await prod_repo.get_many_by_product_ids([e.product_id for e in entries])
    by_id = {p.product_id: p for p in products}
    # keep wishlist order, drop products deleted since
    items = [ProductOut.from_product(by_id[e.product_id]) for e in entries if e.product_id in by_id]
    logger.info(f"Response: get_wishlist user_id={user_id} items={len(items)}")
    return WishlistOut(items=items, count=len(items))


@router.post("", status_code=201)
async def add_to_wishlist(
    user_id: str,
    body: WishlistAddIn,
    wishlist_repo: WishlistRepo = Depends(wishlist_repo_dep),
    prod_repo: ProductRepo = Depends(product_repo_dep),
):
    if not await prod_repo.get_by_product_id(body.product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    await wishlist_repo.add(user_id, body.product_id)
    logger.info(f"Wishlist add user_id={user_id} product_id={body.product_id}")
    return {"productId": body.product_id}


@router.delete("/{product_id}", status_code=204)
async def remove_from_wishlist(
    user_id: str,
    product_id: str,
    wishlist_repo: WishlistRepo = Depends(wishlist_repo_dep),
):
    if not await wishlist_repo.remove(user_id, product_id):
        raise HTTPException(status_code=404, detail="Item not in wishlist")
    return Response(status_code=204)
