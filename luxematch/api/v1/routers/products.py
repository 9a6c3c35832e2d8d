# luxematch/api/v1/routers/products.py
from fastapi import APIRouter, Depends, HTTPException

from luxematch.api.deps import catalog_dep
from luxematch.api.v1.schemas.outfit import ProductListOut
from luxematch.domain.models.product import Catalog, Product

router = APIRouter(tags=["products"])

@router.get("/products", response_model=ProductListOut)
async def list_products(catalog: Catalog = Depends(catalog_dep)):
    items = list(catalog)
    return ProductListOut(items=items, count=len(items))

@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, catalog: Catalog = Depends(catalog_dep)):
    product = catalog.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Unknown product {product_id}")
    return product
