"""JWT access tokens (issue, validate, extract the e-mail claim)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import jwt

from cocktail_api.core.config import Settings, get_settings
from cocktail_api.core.errors import BusinessLogicError, ExceptionCode

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "
MIN_TOKEN_TTL_SECONDS = 60


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    value = (authorization or "").strip()
    if value.lower().startswith(BEARER_PREFIX):
        token = value[len(BEARER_PREFIX):].strip()
        return token or None
    return None


class TokenService:
    """Signs and checks access tokens. TTLs under a minute are raised to one minute."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600) -> None:
        self._secret = secret
        self._algorithm = algorithm
        if ttl_seconds < MIN_TOKEN_TTL_SECONDS:
            logger.warning(
                "Access token TTL %ss is below the %ss floor; using %ss",
                ttl_seconds,
                MIN_TOKEN_TTL_SECONDS,
                MIN_TOKEN_TTL_SECONDS,
            )
        self._ttl = max(MIN_TOKEN_TTL_SECONDS, ttl_seconds)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TokenService":
        settings = settings or get_settings()
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.access_token_ttl_seconds)

    def issue(self, email: str, role: str | None = None) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self._ttl)).timestamp()),
        }
        if role:
            payload["role"] = role
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def _decode(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token or "",
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise BusinessLogicError(ExceptionCode.INVALID_TOKEN, "Token has expired")
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected invalid token: %s", exc)
            raise BusinessLogicError(ExceptionCode.INVALID_TOKEN)
        if not str(payload.get("sub") or "").strip():
            raise BusinessLogicError(ExceptionCode.INVALID_TOKEN)
        return payload

    def validate(self, token: str) -> bool:
        try:
            self._decode(token)
        except BusinessLogicError:
            return False
        return True

    def extract_email(self, token: str) -> str:
        return str(self._decode(token)["sub"]).strip()
