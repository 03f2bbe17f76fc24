# api/v1/schemas/reco.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.models.product import Product, RecommendationResult

class CamelModel(BaseModel):
    """JSON in camelCase, Python in snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ProductOut(CamelModel):
    product_id: str = Field(alias="id")
    name: str
    description: str = ""
    price: float
    image_url: Optional[str] = None
    category: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductOut":
        return cls.model_validate(product.model_dump())

class RecommendationRequest(CamelModel):
    user_id: str = Field(min_length=1)

class RecommendationOut(CamelModel):
    recommendations: List[ProductOut]
    message: Optional[str] = None
    is_demo_mode: bool = False

    @classmethod
    def from_result(cls, result: RecommendationResult) -> "RecommendationOut":
        return cls(
            recommendations=[ProductOut.from_product(p) for p in result.recommendations],
            message=result.message,
            is_demo_mode=result.is_demo_mode,
        )

class AIKeyTestIn(CamelModel):
    api_key: str = ""

class AIKeyTestOut(CamelModel):
    success: bool
    message: str
    response: str
