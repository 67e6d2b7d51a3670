"""Application configuration module."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = Field(default="development", alias="APP_ENV")

    api_base_url: str = Field(default="http://localhost:5000", alias="API_BASE_URL")
    api_timeout_seconds: float = Field(default=10.0, alias="API_TIMEOUT_SECONDS")

    image_upload_url: str = Field(
        default="https://api.cloudinary.com/v1_1/dpomtzref/image/upload",
        alias="IMAGE_UPLOAD_URL",
    )
    image_upload_preset: str = Field(default="bookworm_uploads", alias="IMAGE_UPLOAD_PRESET")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")

    search_debounce_ms: int = Field(default=500, alias="SEARCH_DEBOUNCE_MS")
    cookie_secure: bool = Field(default=False, alias="COOKIE_SECURE")
    flash_max_age: int = Field(default=30, alias="FLASH_MAX_AGE")

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
