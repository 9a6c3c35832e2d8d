# luxematch/domain/repositories/product_repo.py

from __future__ import annotations
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from luxematch.domain.models.product import Catalog, Product

logger = logging.getLogger(__name__)

class ProductRepo:
    """
    Catalog source backed by a Mongo collection of dataset records
    ({ProductID, ProductName, ProductBrand, ...}).
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def load_catalog(self) -> Catalog:
        # natural insertion order is the catalog order
        cursor = self.col.find({}, {"_id": 0}).sort("_id", 1)
        products = [Product.model_validate(doc) async for doc in cursor]
        logger.info(f"Loaded {len(products)} products from collection={self.col.name}")
        return Catalog(products)
