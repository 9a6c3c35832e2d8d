# luxematch/domain/services/validation_svc.py
import json
import logging
import re

from pydantic import ValidationError

from luxematch.domain.errors import MalformedResponse
from luxematch.domain.models.outfit import RawRecommendation

logger = logging.getLogger(__name__)

# Regex to strip code fences (``` or ```json) from LLM output
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)

def _strip_fences(s: str) -> str:
    """Remove ``` or ```json fences the LLM might add."""
    return _CODE_FENCE_RE.sub("", s).strip()

def _describe(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
    )

def parse_recommendation(raw_text: str) -> RawRecommendation:
    """
    Parse the stylist's raw answer and check it against RawRecommendation.
    Identifiers come back trimmed, the sentinel canonicalized.
    Raises MalformedResponse on any parse or shape problem.
    """
    raw = _strip_fences(raw_text or "")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid LLM JSON: {e}; preview={raw[:200]!r}")
        raise MalformedResponse(f"Stylist response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        logger.error(f"LLM JSON is a {type(parsed).__name__}, expected an object")
        raise MalformedResponse(f"Stylist response must be a JSON object, got {type(parsed).__name__}")

    try:
        rec = RawRecommendation.model_validate(parsed)
    except ValidationError as e:
        detail = _describe(e)
        logger.error(f"LLM JSON failed schema validation: {detail}")
        raise MalformedResponse(f"Stylist response failed validation: {detail}") from e

    logger.debug(f"Validated recommendation: {rec.model_dump()}")
    return rec
