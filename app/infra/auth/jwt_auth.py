"""
Session token handling.

The session principal is a signed JWT carrying the internal user id. It is
issued after a successful identity-provider login and travels in an HTTP-only
cookie (or an ``Authorization: Bearer`` header).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from pydantic import BaseModel, ValidationError

from app.infra.config.settings import Settings, get_settings

SESSION_AUDIENCE = "eventfinder-session"


class JWTPayload(BaseModel):
    sub: UUID
    aud: str
    exp: int
    iat: int


class InvalidSessionToken(Exception):
    """Raised when a session token cannot be trusted."""


class JWTAuth:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def max_age_seconds(self) -> int:
        return self.settings.jwt_expires_minutes * 60

    def create_access_token(self, user_id: UUID, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "aud": SESSION_AUDIENCE,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.max_age_seconds),
        }
        return jwt.encode(
            claims, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm
        )

    def verify_token(self, token: str) -> JWTPayload:
        """Decode ``token``; any failure becomes ``InvalidSessionToken``."""
        try:
            claims = jwt.decode(
                token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
                audience=SESSION_AUDIENCE,
                options={"require": ["sub", "aud", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidSessionToken("Session has expired")
        except jwt.MissingRequiredClaimError as e:
            raise InvalidSessionToken(f"Session token missing claim: {e.claim}")
        except jwt.InvalidTokenError:
            raise InvalidSessionToken("Invalid session token")
        try:
            return JWTPayload(**claims)
        except ValidationError:
            raise InvalidSessionToken("Session token does not name a user")

    def extract_user_id_from_token(self, token: str) -> UUID:
        return self.verify_token(token).sub
