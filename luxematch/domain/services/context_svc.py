# luxematch/domain/services/context_svc.py
import logging
import re

from luxematch.domain.models.product import Catalog, Product

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")

def _one_line(s: str) -> str:
    return _WS_RE.sub(" ", s or "").strip()

def _inventory_line(p: Product, desc_chars: int) -> str:
    """
    Reduce a product to the fields the stylist needs to tell items apart.
    Price and image count never influence selection, so they stay out.
    """
    desc = _one_line(p.description)[:desc_chars]
    return (
        f"ID: {p.product_id}, Name: {_one_line(p.name)}, Brand: {_one_line(p.brand)}, "
        f"Color: {_one_line(p.primary_color)}, Desc: {desc}"
    )

def build_inventory_context(catalog: Catalog, *, desc_chars: int = 200) -> str:
    """One line per product, in catalog order. Empty catalog -> empty string."""
    block = "\n".join(_inventory_line(p, desc_chars) for p in catalog)
    logger.debug(f"Inventory context: products={len(catalog)} size={(len(block)/1024):.1f}KB")
    return block
