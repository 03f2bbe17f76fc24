from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

class Product(BaseModel):
    product_id: str
    name: str
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    image_url: Optional[str] = None
    category: str = ""
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    # Admin-edited documents may carry explicit nulls
    @field_validator("description", "category", mode="before")
    @classmethod
    def _null_to_empty(cls, v):
        return "" if v is None else v

class RecommendationResult(BaseModel):
    """
    Outcome of one resolver run. Built fresh per request.
    `is_demo_mode` is True when nothing was personalized (static lists).
    """
    recommendations: List[Product] = Field(default_factory=list, max_length=4)
    message: str = ""
    is_demo_mode: bool = False

    model_config = {"frozen": True}
