from __future__ import annotations

import functools
import json
from typing import Annotated, Any, Dict, Iterable, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "Shopfinder API"
    environment: str = "development"
    # Overrides the environment default (DEBUG in development, INFO in production)
    log_level: Optional[str] = None
    secret_key: str = "changeme"

    # JSON array of shops; the built-in seed catalogue is used when unset
    catalogue_path: Optional[str] = None
    # JSON object of shopkeeper edits keyed by shop name; in-memory when unset
    override_store_path: Optional[str] = None

    max_offers: int = Field(default=5, ge=1)

    cors_origins: str = "*"
    rate_limit: str = "60/minute"

    # Env value is either JSON or "PASSKEY:Shop Name,PASSKEY2:Other Shop"
    shopkeeper_passkeys: Annotated[Dict[str, str], NoDecode] = Field(default_factory=dict)
    token_ttl_hours: int = 12

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate SECRET_KEY meets security requirements."""
        insecure_defaults = [
            "changeme",
            "change-me",
            "dev-secret",
            "secret",
            "password",
            "admin",
        ]

        if len(v) < 32:
            raise ValueError(
                f"SECRET_KEY must be at least 32 characters long (current: {len(v)}). "
                "Generate a secure key with: openssl rand -base64 32"
            )

        if v.lower() in insecure_defaults:
            raise ValueError(
                "SECRET_KEY cannot be a default value. "
                "Generate a secure key with: openssl rand -base64 32"
            )

        return v

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level

    @field_validator("shopkeeper_passkeys", mode="before")
    @classmethod
    def _parse_passkeys(cls, value: Any) -> Dict[str, str]:
        """Accept a dict, a JSON object or ``"PASSKEY:Shop Name,..."``."""
        if not value:
            return {}
        if isinstance(value, dict):
            return {str(k): str(v).strip() for k, v in value.items()}
        if isinstance(value, str) and value.lstrip().startswith("{"):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid passkey JSON: {exc}") from exc
            if not isinstance(value, dict):
                raise ValueError("Passkey JSON must be an object")
            return {str(k): str(v).strip() for k, v in value.items()}
        if isinstance(value, str):
            items: Iterable[str] = value.split(",")
            result: Dict[str, str] = {}
            for item in items:
                if not item.strip():
                    continue
                key, sep, shop = item.partition(":")
                if not sep or not shop.strip():
                    raise ValueError(f"Passkey entry must look like KEY:Shop Name (got {item!r})")
                result[key.strip()] = shop.strip()
            return result
        raise ValueError("Unsupported passkey format")


@functools.lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
