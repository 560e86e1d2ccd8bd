"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for RentCar happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. token_secret -> TOKEN_SECRET). Type coercion is built in.

  @model_validator(mode="after"): Runs after all fields are resolved from the
      environment. Used to reject a missing or weak TOKEN_SECRET at startup so
      the first login never discovers a broken signing configuration.

Security notes:
  The signing secret is read once here and handed to auth.tokens.TokenIssuer
  by the application lifespan. Nothing reads it again at request time.

  ConfigurationError is not a ValueError subclass, so pydantic lets it
  propagate unchanged instead of wrapping it in a ValidationError.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or fleet/.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError

logger = logging.getLogger("rentcar.config")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'rentcar.db'}"

_MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    token_secret has no usable default: an empty value is the sentinel for
    "not configured" and the validator turns it into a ConfigurationError.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # HS256 signing key for bearer tokens (AppSettings:Token in the old config).
    token_secret: str = ""

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    database_url: str = _DEFAULT_DB_URL

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_token_secret(self) -> "Settings":
        """Refuse to start without a usable signing secret.

        A missing secret would make every login fail at signing time; a short
        one weakens HMAC-SHA256. Both are fatal at boot.
        """
        if not self.token_secret:
            raise ConfigurationError(
                "TOKEN_SECRET is required. Set TOKEN_SECRET in your environment or .env file."
            )
        if len(self.token_secret) < _MIN_SECRET_LENGTH:
            raise ConfigurationError(f"TOKEN_SECRET must be at least {_MIN_SECRET_LENGTH} characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
