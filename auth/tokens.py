"""
auth/tokens.py -- Bearer token issuance and verification.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry only the phone number as the
       subject plus issued-at and expiry. There is no server-side session --
       a token is valid exactly when its signature and expiry check out.

  Lifetime: fixed 24 hours from issuance. Callers cannot shorten or extend
       it per token.

  Secret: injected once into TokenIssuer by the application lifespan from
       core.config.Settings.token_secret. TokenIssuer never reads settings or
       the environment on its own, so the key cannot change under a running
       process. An empty secret raises ConfigurationError at construction --
       i.e. at startup, not on the first login.

Layer rule: no imports from api/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt

from core.errors import ConfigurationError

if TYPE_CHECKING:
    from auth.models import User

logger = logging.getLogger("rentcar.auth")

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=1)


class TokenIssuer:
    """Signs and verifies bearer tokens with a process-wide symmetric key.

    Usage:
        issuer = TokenIssuer(settings.token_secret)
        token = issuer.issue(user)
        claims = issuer.decode(token)   # dict or None
    """

    def __init__(self, secret: str, lifetime: timedelta = TOKEN_LIFETIME) -> None:
        if not secret:
            raise ConfigurationError("Token signing secret is not configured.")
        self._secret = secret
        self.lifetime = lifetime

    def issue(self, user: User) -> str:
        """Encode a signed JWT whose subject is the user's phone number."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.phone_number,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict | None:
        """Verify a JWT and return its claims, or None on any failure.

        Rejects bad signatures, expired tokens, other algorithms and tokens
        without a subject. Returning None keeps callers simple: any invalid
        token is treated as unauthenticated.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            return None
        if not payload.get("sub"):
            return None
        return payload
