"""
Client-credentials token acquisition against the Microsoft identity platform.
"""

import httpx

from incident_call.core.config import AzureSettings
from incident_call.core.exceptions import AuthError
from incident_call.core.logging import get_logger
from incident_call.domain.models import AccessToken

logger = get_logger("token_provider")


class TokenProvider:
    """
    Exchanges the application's tenant/client credentials for a Graph token.

    One request per call; tokens are not cached.
    """

    def __init__(self, settings: AzureSettings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._http_client = http_client

    async def get_token(self) -> AccessToken:
        """
        Acquire an application access token.

        Returns:
            AccessToken for the configured scope.

        Raises:
            AuthError: If the identity provider rejects the request or cannot be reached.
        """
        data = {
            "client_id": self._settings.client_id,
            "scope": self._settings.scope,
            "client_secret": self._settings.client_secret,
            "grant_type": "client_credentials",
        }

        try:
            response = await self._http_client.post(self._settings.token_endpoint, data=data)
        except httpx.HTTPError as e:
            raise AuthError(reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            raise AuthError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthError(response.status_code, response.text) from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            raise AuthError(response.status_code, "access_token missing from token response")

        logger.debug(f"Acquired application token (expires_in={payload.get('expires_in')})")
        return AccessToken(
            value=access_token,
            token_type=payload.get("token_type", "Bearer"),
            expires_in=payload.get("expires_in"),
        )
