from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]
ProviderName = Literal["openai", "gemini"]

DEFAULT_CATALOG_PATH = str(Path(__file__).resolve().parent.parent / "data" / "catalog.json")

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "LuxeMatch"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # API
    API_PREFIX: str = "/api/v1"
    ALLOWED_ORIGINS: str = ""                  # CSV

    # Generation capability
    LLM_PROVIDER: ProviderName = "openai"
    OPENAI_API_KEY: str = ""
    OPENAI_STYLIST_MODEL: str = "gpt-4o-mini"
    openai_timeout_s: int = 30                 # seconds, per provider call
    GEMINI_API_KEY: str = ""
    GEMINI_STYLIST_MODEL: str = "gemini-2.5-flash"
    gemini_timeout_s: int = 30                 # seconds, per provider call
    stylist_temperature: float = 0.7
    stylist_max_tokens: int = 1024

    # Inventory context
    INVENTORY_DESC_CHARS: int = 200

    # Caller-side deadline for one styling request (None = wait for the provider)
    STYLIST_DEADLINE_S: Optional[float] = None

    # Catalog sources (Mongo wins when configured)
    MONGO_URI: str = ""
    MONGO_DB: str = "luxematch"
    MONGO_CATALOG_COLLECTION: str = "products"
    CATALOG_PATH: str = DEFAULT_CATALOG_PATH

    # Sessions
    REDIS_URL: str = ""
    session_lock_ttl: int = 120                # seconds; busy flag self-heals after a crash,
                                               # raised to outlast the provider timeout or deadline
    session_state_ttl: int = 2 * 3600          # seconds; current recommendation per session

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
