"""
Application configuration and environment settings.
"""
import base64
import binascii
import logging
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

AES_KEY_SIZE = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Journal"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./journal.db"
    DB_ECHO: bool = False
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a pooled connection

    # JWT
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 72
    ENABLE_REGISTRATION: bool = True

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # File Upload
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/jpg", "image/gif", "image/webp"]
    UPLOAD_DIR: str = "uploads"

    # Content encryption (base64 of a 32-byte AES-256 key, empty disables encryption)
    AES_KEY_BASE64: str = ""

    @field_validator("AES_KEY_BASE64")
    @classmethod
    def validate_aes_key(cls, v: str) -> str:
        """Reject keys that are not valid base64 or do not decode to 32 bytes."""
        v = v.strip()
        if not v:
            return v
        try:
            key = base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid AES_KEY_BASE64: {e}")
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"AES key must be {AES_KEY_SIZE} bytes (AES-256), got {len(key)}")
        return v

    @property
    def aes_key(self) -> Optional[bytes]:
        """Decoded content key, or None when encryption is not configured."""
        if not self.AES_KEY_BASE64:
            return None
        return base64.b64decode(self.AES_KEY_BASE64)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

if settings.aes_key is None:
    logger.warning("AES key not set. Diary content won't be encrypted.")
