"""Shared test fixtures for az-arm-client tests."""

from __future__ import annotations

import json
import os
import time
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
import requests

from az_arm_client.client import AzureClient
from az_arm_client.settings import AzureSettings

SUBSCRIPTION_ID = "fake-subscription-id"
TENANT_ID = "fake-tenant-id"
DEFAULT_RESOURCE_GROUP = "fake-default-group"
VALID_ACCESS_TOKEN = "valid-access-token"


@pytest.fixture(autouse=True)
def _clean_azure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real ``AZURE_*`` variables out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("AZURE_"):
            monkeypatch.delenv(key)


def _response(status_code: int, body: str = "", headers: dict | None = None) -> MagicMock:
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.text = body
    resp.headers = headers or {}
    resp.json.side_effect = lambda: json.loads(body)
    return resp


@pytest.fixture()
def make_response() -> Callable[..., MagicMock]:
    """Build a mocked ``requests.Response`` from a status and a raw body."""
    return _response


@pytest.fixture()
def token_response() -> Callable[..., MagicMock]:
    """Build a successful identity-endpoint response."""

    def _make(access_token: str = VALID_ACCESS_TOKEN, expires_in: int = 1800) -> MagicMock:
        body = json.dumps(
            {"access_token": access_token, "expires_on": str(int(time.time()) + expires_in)}
        )
        return _response(200, body)

    return _make


@pytest.fixture()
def settings() -> AzureSettings:
    return AzureSettings(
        tenant_id=TENANT_ID,
        client_id="fake-client-id",
        client_secret="fake-client-secret",
        subscription_id=SUBSCRIPTION_ID,
        resource_group_name=DEFAULT_RESOURCE_GROUP,
        _env_file=None,
    )


@pytest.fixture()
def session() -> MagicMock:
    """A mocked transport: ``post`` hits the identity endpoint, ``request`` ARM."""
    return MagicMock(spec=requests.Session)


@pytest.fixture()
def azure_client(settings: AzureSettings, session: MagicMock) -> AzureClient:
    return AzureClient(settings, session=session)
