# api/v1/schemas/outfit.py
from typing import List, Optional
from pydantic import BaseModel, Field

from luxematch.domain.models.product import Product

class StyleRequest(BaseModel):
    query: str = Field(..., max_length=500, description="Occasion to dress for")
    session_id: Optional[str] = Field(
        None, min_length=1, max_length=128,
        description="Client session; one styling request in flight per session",
    )

class ProductListOut(BaseModel):
    items: List[Product]
    count: int

class ErrorOut(BaseModel):
    error: str
    detail: str
