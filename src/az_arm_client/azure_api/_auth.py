"""OAuth2 token acquisition and caching for ARM calls."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import requests
from azure.core.credentials import TokenCredential
from azure.core.exceptions import (
    ClientAuthenticationError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.identity import DefaultAzureCredential

from az_arm_client.errors import AuthenticationError, AzureError, TransportError
from az_arm_client.settings import AzureSettings

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = (
    "Azure authentication failed: Invalid tenant_id, client_id or client_secret/certificate."
)
_BAD_REQUEST = (
    "Azure authentication failed: Bad request. Please assure no typo in values of "
    "tenant_id, client_id or client_secret/certificate."
)


@dataclass(frozen=True)
class Token:
    """A bearer token and its absolute expiry (epoch seconds)."""

    access_token: str
    expires_on: float

    def is_expired(self, now: float | None = None) -> bool:
        return (time.time() if now is None else now) >= self.expires_on


class TokenManager:
    """Acquire, cache and renew the bearer token used for ARM requests.

    Tokens come from the client-credentials grant of the identity endpoint,
    or from an ``azure-identity`` credential when one is supplied (or when
    ``use_default_credential`` is set).  A cached token is reused until it
    expires or until :meth:`renew` reports that ARM rejected it.
    """

    def __init__(
        self,
        settings: AzureSettings,
        session: requests.Session,
        credential: TokenCredential | None = None,
    ) -> None:
        self._settings = settings
        self._session = session
        if credential is None and settings.use_default_credential:
            credential = DefaultAzureCredential()
        self._credential = credential
        self._token: Token | None = None
        self._lock = threading.Lock()

    @property
    def token_url(self) -> str:
        return (
            f"{self._settings.authority_host}/{self._settings.tenant_id}/oauth2/token"
            f"?api-version={self._settings.api_version}"
        )

    def get_token(self, force_refresh: bool = False) -> str:
        """Return a valid access token, acquiring one when needed."""
        with self._lock:
            if force_refresh or self._token is None or self._token.is_expired():
                self._token = None
                self._token = self._acquire()
            return self._token.access_token

    def renew(self, rejected_token: str) -> str:
        """Replace *rejected_token* after ARM answered 401.

        When another caller has already swapped the token in the meantime,
        the fresh token is returned without a second acquisition.
        """
        with self._lock:
            current = self._token
            if (
                current is not None
                and current.access_token != rejected_token
                and not current.is_expired()
            ):
                return current.access_token
            self._token = None
            self._token = self._acquire()
            return self._token.access_token

    def invalidate(self) -> None:
        """Drop the cached token."""
        with self._lock:
            self._token = None

    def _acquire(self) -> Token:
        if self._credential is not None:
            return self._acquire_from_credential()
        return self._acquire_client_secret()

    def _acquire_from_credential(self) -> Token:
        scope = f"{self._settings.resource_manager_endpoint}/.default"
        kwargs: dict[str, str] = {}
        if self._settings.tenant_id:
            kwargs["tenant_id"] = self._settings.tenant_id
        try:
            access = self._credential.get_token(scope, **kwargs)  # type: ignore[union-attr]
        except ClientAuthenticationError as exc:
            raise AuthenticationError(f"Azure authentication failed: {exc.message}") from exc
        except (ServiceRequestError, ServiceResponseError) as exc:
            raise TransportError(f"get_token - {exc}") from exc
        logger.debug("Acquired token from %s", type(self._credential).__name__)
        return Token(access_token=access.token, expires_on=float(access.expires_on))

    def _acquire_client_secret(self) -> Token:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "resource": f"{self._settings.resource_manager_endpoint}/",
        }
        logger.debug("Requesting token for tenant %s", self._settings.tenant_id)
        try:
            resp = self._session.post(
                self.token_url, data=data, timeout=self._settings.request_timeout
            )
        except (
            requests.ConnectionError,
            requests.Timeout,
            requests.exceptions.ChunkedEncodingError,
        ) as exc:
            raise TransportError(f"get_token - {exc}") from exc

        status = resp.status_code
        if status == 200:
            try:
                payload = resp.json()
                return Token(
                    access_token=payload["access_token"],
                    expires_on=float(payload["expires_on"]),
                )
            except (ValueError, KeyError, TypeError) as exc:
                raise AzureError(
                    f"get_token - http code: {status}. Malformed token response."
                ) from exc
        if status == 401:
            raise AuthenticationError(
                f"get_token - http code: {status}. {_INVALID_CREDENTIALS}", status_code=status
            )
        if status == 400:
            raise AuthenticationError(
                f"get_token - http code: {status}. {_BAD_REQUEST}", status_code=status
            )
        logger.warning("Token request for tenant %s failed (%s)", self._settings.tenant_id, status)
        raise AzureError(f"get_token - http code: {status}. Error message: {resp.text}")
