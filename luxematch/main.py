from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from luxematch.core.config import get_settings
from luxematch.core.lifespan import lifespan
from luxematch.core.logging import configure_logging
from luxematch.api.v1.routers.health import router as health_router
from luxematch.api.v1.routers.outfits import router as outfits_router
from luxematch.api.v1.routers.products import router as products_router
from luxematch.domain.errors import OutfitError

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS="https://luxematch.example,https://www.luxematch.example"
allowed_origins = settings.allowed_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(OutfitError)
async def outfit_error_handler(request: Request, exc: OutfitError):
    if exc.status_code >= 500:
        logger.error("Styling failed kind=%s path=%s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.kind, "detail": exc.message})

# ------- Routes -------
app.include_router(health_router)
app.include_router(outfits_router, prefix=settings.API_PREFIX)
app.include_router(products_router, prefix=settings.API_PREFIX)
