# Settings management (reads env vars/secrets)
# myflix/core/config.py

import json
import logging
from functools import lru_cache
from typing import Annotated, List, Optional, Union

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.

    Missing database or storage values never fail here; the affected subsystem
    fails on first use instead.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("myFlix API", validation_alias="PROJECT_NAME")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")

    # --- Server ---
    HOST: str = Field("0.0.0.0", validation_alias="HOST")
    PORT: int = Field(3000, validation_alias="PORT")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Database (MongoDB) ---
    MONGO_URI: SecretStr = Field(
        SecretStr("mongodb://localhost:27017/myflix"),
        validation_alias=AliasChoices("MONGO_URI", "MONGODB_URI"),
    )
    MONGO_DB_FALLBACK: str = Field("myflix", validation_alias="MONGO_DB_FALLBACK")
    MONGO_TIMEOUT_MS: int = Field(
        5000,
        validation_alias="MONGO_TIMEOUT_MS",
        description="Server selection, connect and socket timeout for MongoDB calls",
    )

    # --- Object Storage (S3) ---
    S3_BUCKET: Optional[str] = Field(None, validation_alias="S3_BUCKET")
    AWS_ACCESS_KEY_ID: Optional[SecretStr] = Field(None, validation_alias="AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: Optional[SecretStr] = Field(None, validation_alias="AWS_SECRET_ACCESS_KEY")
    AWS_REGION: str = Field("us-east-1", validation_alias="AWS_REGION")
    STORAGE_ENDPOINT_URL: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("STORAGE_ENDPOINT_URL", "LOCALSTACK_ENDPOINT"),
        description="Endpoint for S3-compatible storage (e.g. LocalStack). None means AWS.",
    )
    S3_PUBLIC_BASE_URL: Optional[str] = Field(
        None,
        validation_alias="S3_PUBLIC_BASE_URL",
        description="Base for public object URLs. Defaults to https://<bucket>.s3.amazonaws.com",
    )
    STORAGE_CONNECT_TIMEOUT: float = Field(5.0, validation_alias="STORAGE_CONNECT_TIMEOUT")
    STORAGE_READ_TIMEOUT: float = Field(30.0, validation_alias="STORAGE_READ_TIMEOUT")

    # --- Uploads ---
    UPLOADS_DIR: str = Field("uploads", validation_alias="UPLOADS_DIR")
    MAX_BODY_BYTES: int = Field(20 * 1024 * 1024, validation_alias="MAX_BODY_BYTES")

    # --- Credentials ---
    BCRYPT_ROUNDS: int = Field(10, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # --- CORS ---
    # Expects a comma-separated string in env var like "http://localhost:1234,https://example.com"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS",
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    @property
    def public_base_url(self) -> Optional[str]:
        if self.S3_PUBLIC_BASE_URL:
            return self.S3_PUBLIC_BASE_URL.rstrip("/")
        if self.S3_BUCKET:
            return f"https://{self.S3_BUCKET}.s3.amazonaws.com"
        return None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    logger.info("Attempting to load application settings...")
    try:
        settings_instance = Settings()
        logger.info(f"Settings loaded successfully for Project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"CORS Origins: {settings_instance.BACKEND_CORS_ORIGINS}")
        logger.info(f"S3 Bucket: {settings_instance.S3_BUCKET or 'Not Set'}")
        logger.info(f"Uploads directory: {settings_instance.UPLOADS_DIR}")
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")


settings: Settings = get_settings()
