# access token lifecycle
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import requests

from gphoto_uploader.config import Credentials, EndpointSettings
from gphoto_uploader.exceptions import AuthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """A bearer token and the moment it was obtained."""

    value: str
    obtained_at: float
    ttl_seconds: float

    @property
    def valid_until(self) -> float:
        return self.obtained_at + self.ttl_seconds

    def is_expired(self, now: float) -> bool:
        # No skew margin: a token is reused right up to the end of its stated lifetime
        return now - self.obtained_at > self.ttl_seconds


class TokenManager:
    """
    Hands out a valid access token, refreshing it from the refresh token when needed.

    The first call to get_access_token() always refreshes. Refreshed tokens are
    kept in memory only; nothing is written back to the credentials file.

    Not thread-safe. Callers sharing one manager across threads must serialize
    get_access_token() so that only one refresh is in flight at a time.
    """

    def __init__(
        self,
        credentials: Credentials,
        endpoints: EndpointSettings | None = None,
        timeout: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.endpoints = endpoints or EndpointSettings()
        self.timeout = timeout
        self._clock = clock
        self._ttl_seconds = float(credentials.expires_in)
        self._token: AccessToken | None = None
        self.refresh_count = 0

    def get_access_token(self) -> str:
        """
        Return a currently valid bearer token.

        Raises:
            AuthError: If the token endpoint rejects the refresh or returns no token
        """
        token = self._token
        if token is None or token.is_expired(self._clock()):
            token = self._refresh()
        return token.value

    def invalidate(self) -> None:
        """Drop the cached token so the next call refreshes."""
        self._token = None

    def _refresh(self) -> AccessToken:
        body = {
            "refresh_token": self.credentials.refresh_token,
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "grant_type": "refresh_token",
        }
        logger.debug(f"Refreshing access token via {self.endpoints.token_endpoint}")
        try:
            r = requests.post(
                self.endpoints.token_endpoint,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Token refresh request failed: {type(e).__name__}: {e}") from e

        if not 200 <= r.status_code < 300:
            raise AuthError("Token refresh rejected", status_code=r.status_code, body=r.text)

        try:
            payload = r.json()
        except ValueError as e:
            raise AuthError(
                "Token refresh response is not JSON", status_code=r.status_code, body=r.text
            ) from e

        value = payload.get("access_token") if isinstance(payload, dict) else None
        if not value or not isinstance(value, str):
            raise AuthError(
                "Token refresh response has no access_token",
                status_code=r.status_code,
                body=r.text,
            )

        expires_in = payload.get("expires_in")
        if expires_in is not None:
            try:
                ttl = float(expires_in)
            except (TypeError, ValueError):
                ttl = 0.0
            if ttl > 0:
                self._ttl_seconds = ttl
            else:
                logger.warning(
                    f"Ignoring unusable expires_in={expires_in!r}, keeping {self._ttl_seconds}s"
                )

        # obtained_at is taken after the response so the lifetime never starts early
        token = AccessToken(value=value, obtained_at=self._clock(), ttl_seconds=self._ttl_seconds)
        self._token = token
        self.refresh_count += 1
        logger.info(f"Obtained access token (valid for {token.ttl_seconds:.0f}s)")
        return token
