# luxematch/api/v1/routers/outfits.py
from fastapi import APIRouter, Depends, HTTPException, Response
import time
import logging

from luxematch.api.deps import styling_dep
from luxematch.api.v1.schemas.outfit import ErrorOut, StyleRequest
from luxematch.domain.models.outfit import AIRecommendation
from luxematch.domain.services.session_svc import StylingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["outfits"])

_ERRORS = {
    400: {"model": ErrorOut, "description": "Blank query"},
    409: {"model": ErrorOut, "description": "Request already in flight, or abandoned"},
    502: {"model": ErrorOut, "description": "Stylist answer did not match the schema"},
    503: {"model": ErrorOut, "description": "Stylist unavailable"},
}

@router.post("/outfits", response_model=AIRecommendation, responses=_ERRORS)
async def style_me(body: StyleRequest, styling: StylingService = Depends(styling_dep)):
    """
    Turn an occasion description into a four-slot outfit from the catalog.
    Slots carry a status: resolved, none_selected (dress/jumpsuit, no bottom)
    or unresolved (the stylist named an unknown product).
    """
    logger.info("Request: style_me session_id=%s query_len=%s", body.session_id, len(body.query))
    start_time = time.perf_counter()

    rec = await styling.style(body.query, session_id=body.session_id)

    elapsed_time = time.perf_counter() - start_time
    logger.info("Response: style_me session_id=%s occasion=%r elapsed_time=%.4fs",
                body.session_id, rec.occasion, elapsed_time)
    return rec

@router.get("/sessions/{session_id}/recommendation", response_model=AIRecommendation)
async def current_recommendation(session_id: str, styling: StylingService = Depends(styling_dep)):
    rec = await styling.current(session_id)
    if rec is None:
        raise HTTPException(status_code=404, detail="No recommendation for this session")
    return rec

@router.delete("/sessions/{session_id}", status_code=204)
async def abandon_session(session_id: str, styling: StylingService = Depends(styling_dep)):
    """Forget the session; a request still in flight will have its result dropped."""
    await styling.abandon(session_id)
    return Response(status_code=204)
