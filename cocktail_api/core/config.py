"""
Configuration helpers for the cocktail backend.

Settings are read once from environment variables (database, SMTP, JWT,
verification code lifetime, log level) so that routers/services never fetch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import logging
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    jwt_secret_key: str
    jwt_algorithm: str
    # floor of 60s applied by TokenService
    access_token_ttl_seconds: int
    auth_code_expiration_millis: int
    log_level: str
    host: str
    port: int

    @property
    def auth_code_ttl_seconds(self) -> float:
        return self.auth_code_expiration_millis / 1000


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./cocktail.db"),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change-me-in-production-please-use-32+-bytes"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_ttl_seconds=_int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "3600"), 3600),
        auth_code_expiration_millis=_int(os.getenv("AUTH_CODE_EXPIRATION_MILLIS", "1800000"), 1800000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8000"), 8000),
    )


LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger with a single stream handler.

    Safe to call more than once: an existing stream handler is reused and only
    its level/formatter are refreshed.
    """
    level_name = (level or get_settings().log_level or "INFO").upper()
    numeric = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric)

    handler = None
    for h in root_logger.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            handler = h
            break
    if handler is None:
        handler = logging.StreamHandler()
        root_logger.addHandler(handler)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
