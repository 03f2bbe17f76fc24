import logging
from typing import List, Optional, Tuple

from app.domain.models.shop import CartLine, Order, OrderLine
from app.domain.repositories.cart_repo import CartRepo
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo

logger = logging.getLogger(__name__)


async def get_cart_svc(cart_repo: CartRepo, prod_repo: ProductRepo, user_id: str) -> Tuple[List[CartLine], float]:
    """
    Cart lines joined with their products, plus the cart total.
    Lines whose product no longer exists are skipped.
    """
    items = await cart_repo.list_by_user(user_id)
    products = await prod_repo.get_many_by_product_ids([i.product_id for i in items])
    by_id = {p.product_id: p for p in products}

    lines: List[CartLine] = []
    for item in items:
        product = by_id.get(item.product_id)
        if product is None:
            logger.warning("cart line skipped, product gone user_id=%s product_id=%s", user_id, item.product_id)
            continue
        lines.append(CartLine(product=product, quantity=item.quantity))

    total = round(sum(line.subtotal for line in lines), 2)
    return lines, total


async def checkout_svc(
    cart_repo: CartRepo,
    prod_repo: ProductRepo,
    order_repo: OrderRepo,
    user_id: str,
) -> Optional[Order]:
    """
    Turn the cart into an order priced at current catalog prices, then drop
    the ordered lines from the cart. Lines added after the cart was read stay
    in the cart. Returns None when there is nothing to order.
    """
    lines, _ = await get_cart_svc(cart_repo, prod_repo, user_id)
    if not lines:
        logger.info("checkout skipped, empty cart user_id=%s", user_id)
        return None

    order = await order_repo.create(
        user_id,
        [OrderLine(product_id=l.product.product_id, quantity=l.quantity, price=l.product.price) for l in lines],
    )
    removed = await cart_repo.remove_many(user_id, [l.product_id for l in order.items])
    logger.info("checkout done user_id=%s order_id=%s total=%.2f lines_removed=%s", user_id, order.order_id, order.total, removed)
    return order
