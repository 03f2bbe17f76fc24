# api/v1/schemas/shop.py
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from app.api.v1.schemas.reco import CamelModel, ProductOut

class ProductIn(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    image_url: Optional[str] = None
    category: str = ""

class ProductPatch(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = None

class CartAddIn(CamelModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1, le=99)

class CartLineOut(CamelModel):
    product: ProductOut
    quantity: int
    subtotal: float

class CartOut(CamelModel):
    items: List[CartLineOut]
    total: float
    count: int

class WishlistAddIn(CamelModel):
    product_id: str = Field(min_length=1)

class WishlistOut(CamelModel):
    items: List[ProductOut]
    count: int

class OrderLineOut(CamelModel):
    product_id: str
    quantity: int
    price: float

class OrderOut(CamelModel):
    order_id: str
    user_id: str
    items: List[OrderLineOut]
    total: float
    status: str
    created_at: Optional[datetime] = None

class ProfileIn(CamelModel):
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class ProfileOut(ProfileIn):
    user_id: str
    updated_at: Optional[datetime] = None
