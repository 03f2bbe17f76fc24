from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

# Values shipped in sample env files; treated as "not configured"
PLACEHOLDER_API_KEYS = {"your_gemini_api_key_here", "demo-api-key", "changeme"}

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "StorefrontReco"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo (empty URI = run without a database, demo mode)
    MONGO_URI: str = ""
    MONGO_DB: str = "storefront"

    # Redis (optional)
    REDIS_URL: str = ""

    # Cache config
    product_list_cache_ttl: int = 5 * 60        # 5 minutes

    # Gemini, through its OpenAI-compatible endpoint
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_timeout_s: float = 8.0  # seconds, whole ranking round-trip

    # Recommendations
    recommendation_limit: int = 4

    # CORS (CSV)
    ALLOWED_ORIGINS: str = ""

    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


def is_ai_configured(settings: Settings) -> bool:
    """True when a real (non-empty, non-placeholder) Gemini key is set."""
    key = (settings.GEMINI_API_KEY or "").strip()
    return bool(key) and key not in PLACEHOLDER_API_KEYS


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
