"""
Google OAuth 2.0 identity provider.

Only the three calls the login callback needs: build the consent URL,
exchange the authorization code, read the userinfo endpoint.
"""

from urllib.parse import urlencode

import httpx

from app.application.ports import IdentityProviderPort
from app.domain_core.entities.user import IdentityProfile
from app.infra.config.settings import Settings
from app.infra.config.logging_config import get_logger


class IdentityProviderError(Exception):
    """Raised when the provider rejects the login."""


class GoogleIdentityProvider(IdentityProviderPort):
    SCOPES = ("openid", "profile", "email")

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings
        self.redirect_uri = f"{settings.host_url.rstrip('/')}/api/auth/callback"
        self._log = get_logger("auth.google")

    def authorization_url(self, state: str) -> str:
        query = urlencode(
            {
                "client_id": self.settings.google_client_id,
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
                "scope": " ".join(self.SCOPES),
                "state": state,
            }
        )
        return f"{self.settings.google_auth_url}?{query}"

    async def fetch_profile(self, code: str) -> IdentityProfile:
        timeout = self.settings.http_timeout_seconds
        try:
            token_response = await self.client.post(
                self.settings.google_token_url,
                data={
                    "code": code,
                    "client_id": self.settings.google_client_id,
                    "client_secret": self.settings.google_client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=timeout,
            )
            token_response.raise_for_status()
            access_token = token_response.json()["access_token"]

            info_response = await self.client.get(
                self.settings.google_userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=timeout,
            )
            info_response.raise_for_status()
            info = info_response.json()
        except (httpx.HTTPError, KeyError, ValueError) as e:
            self._log.warning("auth.google.exchange_failed", error=str(e))
            raise IdentityProviderError("Google login failed") from e

        if not info.get("sub"):
            raise IdentityProviderError("Google profile has no subject id")

        self._log.info("auth.google.profile", external_id=info["sub"])
        return IdentityProfile(
            external_id=info["sub"],
            display_name=info.get("name"),
            email=info.get("email"),
            profile_photo=info.get("picture"),
        )
