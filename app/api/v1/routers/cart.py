from fastapi import APIRouter, Depends, HTTPException, Response
from app.api.deps import cart_repo_dep, order_repo_dep, product_repo_dep
from app.api.v1.schemas.reco import ProductOut
from app.api.v1.schemas.shop import CartAddIn, CartLineOut, CartOut, OrderOut
from app.domain.repositories.cart_repo import CartRepo
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.cart_svc import get_cart_svc, checkout_svc

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/cart", tags=["cart"])


@router.get("", response_model=CartOut)
async def get_cart(
    user_id: str,
    cart_repo: CartRepo = Depends(cart_repo_dep),
    prod_repo: ProductRepo = Depends(product_repo_dep),
):
    lines, total = await get_cart_svc(cart_repo, prod_repo, user_id)
    logger.info(f"Response: get_cart user_id={user_id} lines={len(lines)} total={total:.2f}")
    return CartOut(
        items=[
            CartLineOut(product=ProductOut.from_product(l.product), quantity=l.quantity, subtotal=round(l.subtotal, 2))
            for l in lines
        ],
        total=total,
        count=len(lines),
    )


@router.post("", status_code=201)
async def add_to_cart(
    user_id: str,
    body: CartAddIn,
    cart_repo: CartRepo = Depends(cart_repo_dep),
    prod_repo: ProductRepo = Depends(product_repo_dep),
):
    if not await prod_repo.get_by_product_id(body.product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    item = await cart_repo.add(user_id, body.product_id, body.quantity)
    logger.info(f"Cart add user_id={user_id} product_id={body.product_id} quantity={item.quantity}")
    return {"productId": item.product_id, "quantity": item.quantity}


@router.delete("/{product_id}", status_code=204)
async def remove_from_cart(
    user_id: str,
    product_id: str,
    cart_repo: CartRepo = Depends(cart_repo_dep),
):
    if not await cart_repo.remove(user_id, product_id):
        raise HTTPException(status_code=404, detail="Item not in cart")
    return Response(status_code=204)


@router.post("/checkout", response_model=OrderOut, status_code=201)
async def checkout(
    user_id: str,
    cart_repo: CartRepo = Depends(cart_repo_dep),
    prod_repo: ProductRepo = Depends(product_repo_dep),
    order_repo: OrderRepo = Depends(order_repo_dep),
):
    order = await checkout_svc(cart_repo, prod_repo, order_repo, user_id)
    if order is None:
        raise HTTPException(status_code=400, detail="Cart is empty")
    return OrderOut.model_validate(order.model_dump())
