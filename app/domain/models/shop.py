from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.domain.models.product import Product


def line_id(user_id: str, product_id: str) -> str:
    """Document id of a cart/wishlist line: one line per product per user."""
    return f"{user_id}_{product_id}"


class CartItem(BaseModel):
    user_id: str
    product_id: str
    quantity: int = Field(default=1, ge=1)
    added_at: Optional[datetime] = None

class WishlistItem(BaseModel):
    user_id: str
    product_id: str
    added_at: Optional[datetime] = None

class OrderLine(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    price: float = Field(default=0.0, ge=0)

class Order(BaseModel):
    order_id: str
    user_id: str
    items: List[OrderLine] = Field(default_factory=list)
    total: float = 0.0
    status: str = "pending"
    created_at: Optional[datetime] = None

class UserProfile(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    updated_at: Optional[datetime] = None

class CartLine(BaseModel):
    """Cart item joined with its product."""
    product: Product
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity
