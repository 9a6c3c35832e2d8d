import logging
import time
from typing import Optional

from luxematch.core.config import Settings, get_settings
from luxematch.domain.errors import EmptyQuery
from luxematch.domain.models.outfit import AIRecommendation
from luxematch.domain.models.product import Catalog
from luxematch.domain.services.assembler_svc import assemble_recommendation
from luxematch.domain.services.constants import SLOTS
from luxematch.domain.services.context_svc import build_inventory_context
from luxematch.domain.services.llm_clients import GenerationClient
from luxematch.domain.services.requester_svc import request_recommendation
from luxematch.domain.services.resolver_svc import resolve_outfit_selection
from luxematch.domain.services.validation_svc import parse_recommendation

logger = logging.getLogger(__name__)


async def resolve_outfit(
    query: str,
    *,
    catalog: Catalog,
    client: GenerationClient,
    settings: Optional[Settings] = None,
) -> AIRecommendation:
    """
    End-to-end outfit resolution for one free-text occasion.

    High-level flow:
      1) Reject blank queries before anything leaves the process (EmptyQuery).
      2) Serialize the catalog into the inventory block (catalog order).
      3) One schema-constrained generation call (RecommendationUnavailable).
      4) Parse + validate + normalize the answer (MalformedResponse).
      5) Resolve the four identifiers against the catalog; unknown ids
         degrade their own slot only.
      6) Assemble the AIRecommendation.

    Notes:
      - The generation call is the only await; the catalog is only read.
      - No retry and no timeout here; both belong to the caller.
    """
    settings = settings or get_settings()
    if not query or not query.strip():
        raise EmptyQuery()
    query = query.strip()

    t0 = time.perf_counter()
    logger.info(f"Starting outfit pipeline: query={query[:80]!r} catalog_size={len(catalog)}")

    inventory = build_inventory_context(catalog, desc_chars=settings.INVENTORY_DESC_CHARS)

    t_llm = time.perf_counter()
    raw_text = await request_recommendation(query, inventory, client)
    llm_dt = time.perf_counter() - t_llm

    raw = parse_recommendation(raw_text)
    outfit = resolve_outfit_selection(raw, catalog)
    recommendation = assemble_recommendation(outfit, raw)

    filled = [s for s in SLOTS if not outfit.is_absent(s)]
    total_dt = time.perf_counter() - t0
    logger.info(
        f"Outfit pipeline done occasion={recommendation.occasion!r} filled={filled} "
        f"llm_time={llm_dt:.3f}s total_time={total_dt:.3f}s"
    )
    return recommendation
