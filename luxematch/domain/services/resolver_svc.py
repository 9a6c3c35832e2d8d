# luxematch/domain/services/resolver_svc.py
import logging

from luxematch.domain.models.outfit import (
    NoneSelected,
    OutfitSelection,
    RawRecommendation,
    Resolved,
    SlotResolution,
    Unresolved,
)
from luxematch.domain.models.product import Catalog
from luxematch.domain.services.constants import NO_ITEM_SENTINEL, SENTINEL_SLOTS, SLOT_ID_FIELDS

logger = logging.getLogger(__name__)


def resolve_slot(slot: str, identifier: str, catalog: Catalog) -> SlotResolution:
    """
    Map one identifier onto the catalog. Pure: same (identifier, catalog)
    always gives the same answer.

    - the sentinel in a slot that allows it -> NoneSelected
    - exact ProductID match                 -> Resolved(product)
    - anything else                         -> Unresolved(identifier)
    """
    if slot in SENTINEL_SLOTS and identifier.strip().upper() == NO_ITEM_SENTINEL:
        return NoneSelected()
    product = catalog.get(identifier)
    if product is not None:
        return Resolved(product=product)
    return Unresolved(requested_id=identifier)


def resolve_outfit_selection(raw: RawRecommendation, catalog: Catalog) -> OutfitSelection:
    """Resolve all four slots; a bad identifier degrades only its own slot."""
    slots = {slot: resolve_slot(slot, getattr(raw, field), catalog) for slot, field in SLOT_ID_FIELDS.items()}

    for slot, res in slots.items():
        if isinstance(res, Unresolved):
            # UnresolvedSlot: soft condition, the rest of the outfit stands
            logger.warning(f"Unresolved slot={slot} requested_id={res.requested_id!r}")
        elif isinstance(res, NoneSelected):
            logger.info(f"Slot {slot} intentionally left empty by the stylist")

    return OutfitSelection(**slots)
