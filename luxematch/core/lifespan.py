# luxematch/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from luxematch.db import mongo, redis as r
from luxematch.core.config import Settings, get_settings
from luxematch.domain.models.product import Catalog
from luxematch.domain.repositories.catalog_file_repo import load_catalog_file
from luxematch.domain.repositories.product_repo import ProductRepo
from luxematch.domain.services.llm_clients import get_generation_client
from luxematch.domain.services.session_svc import StylingService, build_session_store

logger = logging.getLogger(__name__)


async def load_catalog(settings: Settings) -> Catalog:
    """Catalog is loaded once per process; Mongo wins over the JSON file."""
    if settings.MONGO_URI:
        await mongo.connect()
        try:
            return await ProductRepo(mongo.get_db(), settings.MONGO_CATALOG_COLLECTION).load_catalog()
        finally:
            await mongo.disconnect()
    return load_catalog_file(settings.CATALOG_PATH)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    catalog = await load_catalog(settings)
    if not len(catalog):
        logger.warning("Catalog is empty; every styling request will be unavailable")

    # Redis optional
    await r.connect()

    client = get_generation_client(settings)
    app.state.catalog = catalog
    app.state.styling = StylingService(
        catalog=catalog,
        client=client,
        sessions=build_session_store(settings, r.get_redis()),
        settings=settings,
    )
    logger.info(f"{settings.APP_NAME} ready: catalog_size={len(catalog)} provider={client.name}")

    # Application runs
    yield

    # --- Shutdown ---
    await r.disconnect()
