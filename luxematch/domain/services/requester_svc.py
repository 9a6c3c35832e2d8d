# luxematch/domain/services/requester_svc.py
import logging

from luxematch.domain.errors import RecommendationUnavailable
from luxematch.domain.services.llm_clients import GenerationClient, output_json_schema
from luxematch.domain.services.prompts import system_prompt, stylist_task

logger = logging.getLogger(__name__)


async def request_recommendation(query: str, inventory: str, client: GenerationClient) -> str:
    """
    Issue exactly one schema-constrained generation request and return the
    raw response text, unparsed.

    Raises RecommendationUnavailable when the inventory is empty (nothing to
    choose from, no call is made), when the provider call fails for any
    reason, or when it comes back without text. Never retries.
    """
    if not inventory.strip():
        logger.warning("Empty inventory; refusing to ask the stylist to pick from nothing")
        raise RecommendationUnavailable(cause="empty inventory")

    task = stylist_task(query, inventory)
    logger.info(f"LLM request provider={client.name} size={(len(task)/1024):.1f}KB")
    logger.debug(f"LLM task preview: {task[:2000]}{'…' if len(task) > 2000 else ''}")

    try:
        text = await client.generate(system=system_prompt(), task=task, schema=output_json_schema())
    except Exception as e:
        logger.error(f"Generation request failed provider={client.name}: {type(e).__name__}: {e}")
        raise RecommendationUnavailable(cause=f"{type(e).__name__}: {e}") from e

    if not text or not text.strip():
        logger.error(f"Generation request returned no text provider={client.name}")
        raise RecommendationUnavailable(cause="empty response")
    return text
