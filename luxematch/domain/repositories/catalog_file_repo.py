# luxematch/domain/repositories/catalog_file_repo.py
import logging
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from luxematch.domain.models.product import Catalog, Product

logger = logging.getLogger(__name__)

_PRODUCTS = TypeAdapter(List[Product])

def load_catalog_file(path: str | Path) -> Catalog:
    """Load a JSON array of dataset records, keeping file order."""
    path = Path(path)
    products = _PRODUCTS.validate_json(path.read_bytes())
    logger.info(f"Loaded {len(products)} products from {path}")
    return Catalog(products)
