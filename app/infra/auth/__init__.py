"""Authentication infrastructure package."""

from .jwt_auth import JWTAuth, JWTPayload, InvalidSessionToken
from .google_oauth import GoogleIdentityProvider, IdentityProviderError

__all__ = [
    "JWTAuth",
    "JWTPayload",
    "InvalidSessionToken",
    "GoogleIdentityProvider",
    "IdentityProviderError",
]
