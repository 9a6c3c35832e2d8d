# luxematch/db/mongo.py
import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from luxematch.core.config import get_settings
import certifi

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_db() -> AsyncIOMotorDatabase:
    assert _db is not None, "Mongo DB not initialized"
    return _db


async def connect():
    """
    Create Motor client with explicit CA bundle for mongodb+srv URIs.
    Unlike a long-lived service connection, a failed ping is fatal here:
    the catalog cannot be loaded without it.
    """
    global _client, _db
    settings = get_settings()
    tls = settings.MONGO_URI.startswith("mongodb+srv://")
    kwargs = {"tls": True, "tlsCAFile": certifi.where()} if tls else {}
    _client = AsyncIOMotorClient(
        settings.MONGO_URI,
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=6000,
        connectTimeoutMS=6000,
        **kwargs,
    )
    _db = _client[settings.MONGO_DB]
    await _client.admin.command("ping")
    logger.info(f"Mongo connected db={settings.MONGO_DB}")


async def disconnect():
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
