"""Authenticated request execution against the ARM endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from az_arm_client.azure_api._auth import TokenManager
from az_arm_client.errors import AuthenticationError, HttpError, TransportError
from az_arm_client.settings import AzureSettings

logger = logging.getLogger(__name__)

# Connection-level failures worth another attempt with the same token.
RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
    EOFError,
    ConnectionResetError,
)

# Statuses that mean "no such resource / no content" rather than failure.
_ABSENT_STATUSES = frozenset({204, 404})


class HttpExecutor:
    """Send ARM requests with a bearer token and interpret the response."""

    def __init__(
        self,
        settings: AzureSettings,
        session: requests.Session,
        token_manager: TokenManager,
    ) -> None:
        self._settings = settings
        self._session = session
        self._tokens = token_manager

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, str],
        body: Any = None,
    ) -> Any:
        """Perform *method* on *path* and return the parsed JSON body.

        Returns ``None`` for empty 2xx bodies, 204 and 404.  A 401 renews the
        token and retries once; a second 401 raises :class:`AuthenticationError`.
        """
        method = method.upper()
        token = self._tokens.get_token()
        resp = self._send(method, path, params, body, token)

        if resp.status_code == 401:
            logger.info("%s %s returned 401, renewing token and retrying", method, path)
            token = self._tokens.renew(token)
            resp = self._send(method, path, params, body, token)
            if resp.status_code == 401:
                raise AuthenticationError(
                    f"http_{method.lower()} - http code: 401. "
                    "Azure authentication failed: Token is invalid.",
                    status_code=401,
                )

        return self._parse(method, resp)

    def _send(
        self,
        method: str,
        path: str,
        params: dict[str, str],
        body: Any,
        token: str,
    ) -> requests.Response:
        url = f"{self._settings.resource_manager_endpoint}{path}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        max_retries = self._settings.max_retries
        resp = None
        for attempt in range(max_retries):
            try:
                resp = self._session.request(
                    method,
                    url,
                    params=params,
                    headers=headers,
                    json=body,
                    timeout=self._settings.request_timeout,
                )
                break
            except RETRYABLE_ERRORS as exc:
                if attempt == max_retries - 1:
                    raise TransportError(
                        f"http_{method.lower()} - {type(exc).__name__}: {exc}"
                    ) from exc
                wait_time = self._settings.retry_interval * 2**attempt
                logger.warning(
                    "%s %s failed (%s), retrying in %ss (attempt %s/%s)",
                    method,
                    path,
                    type(exc).__name__,
                    wait_time,
                    attempt + 1,
                    max_retries,
                )
                time.sleep(wait_time)
        return resp  # type: ignore[return-value]

    @staticmethod
    def _parse(method: str, resp: requests.Response) -> Any:
        status = resp.status_code
        if status in _ABSENT_STATUSES:
            return None
        if 200 <= status < 300:
            if not resp.text.strip():
                return None
            try:
                return resp.json()
            except ValueError as exc:
                raise HttpError(
                    f"http_{method.lower()} - http code: {status}. "
                    f"Malformed response body: {resp.text}",
                    status_code=status,
                    body=resp.text,
                ) from exc
        raise HttpError(
            f"http_{method.lower()} - http code: {status}. Error message: {resp.text}",
            status_code=status,
            body=resp.text,
        )
