from __future__ import annotations
from typing import Dict, Iterable, Iterator, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

class Product(BaseModel):
    """
    One catalog entry. Records use the dataset column names
    (ProductID, ProductName, ...); attributes are snake_case.
    """
    product_id: str = Field(..., alias="ProductID", min_length=1)
    name: str = Field(..., alias="ProductName")
    brand: str = Field("", alias="ProductBrand")
    gender: str = Field("", alias="Gender")
    price: float = Field(0.0, alias="Price", ge=0)
    num_images: int = Field(0, alias="NumImages", ge=0)
    description: str = Field("", alias="Description")
    primary_color: str = Field("", alias="PrimaryColor")

    # numeric ProductIDs from the source dataset are kept as strings
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


class Catalog:
    """
    Ordered, read-only set of products. Ground truth for every identifier
    the stylist model may emit.
    """

    def __init__(self, products: Iterable[Product]):
        items: Tuple[Product, ...] = tuple(products)
        by_id: Dict[str, Product] = {}
        for p in items:
            if p.product_id in by_id:
                raise ValueError(f"Duplicate ProductID in catalog: {p.product_id}")
            by_id[p.product_id] = p
        self._items = items
        self._by_id = by_id

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Catalog":
        return cls(Product.model_validate(r) for r in records)

    def get(self, product_id: str) -> Optional[Product]:
        """Exact match on ProductID."""
        return self._by_id.get(product_id)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def __iter__(self) -> Iterator[Product]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Catalog(size={len(self._items)})"
