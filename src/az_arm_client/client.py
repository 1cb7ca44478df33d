"""Azure Resource Manager client.

Every public method returns plain Python objects (dicts / lists) or ``None``
when the resource does not exist.  Failures surface as the typed errors of
:mod:`az_arm_client.errors`; callers never see raw HTTP status codes.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from azure.core.credentials import TokenCredential

from az_arm_client.azure_api import (
    HttpExecutor,
    ResourceId,
    TokenManager,
    _paginate,
    parse_name_from_id,
    rest_api_url,
)
from az_arm_client.settings import AzureSettings

logger = logging.getLogger(__name__)


class AzureClient:
    """Authenticated ARM client bound to one subscription."""

    def __init__(
        self,
        settings: AzureSettings | None = None,
        *,
        session: requests.Session | None = None,
        credential: TokenCredential | None = None,
    ) -> None:
        self.settings = settings if settings is not None else AzureSettings()
        self.session = session if session is not None else requests.Session()
        self.token_manager = TokenManager(self.settings, self.session, credential)
        self.executor = HttpExecutor(self.settings, self.session, self.token_manager)

    # -- Paths ---------------------------------------------------------------

    def rest_api_url(
        self,
        resource_provider: str,
        resource_type: str,
        resource_group_name: str | None = None,
        name: str | None = None,
        others: str | None = None,
    ) -> str:
        """Return the ARM path of a resource in this client's subscription."""
        return rest_api_url(
            self.settings.subscription_id,
            self.settings.resource_group_name,
            resource_provider,
            resource_type,
            resource_group_name=resource_group_name,
            name=name,
            others=others,
        )

    @staticmethod
    def parse_name_from_id(resource_id: str) -> ResourceId:
        return parse_name_from_id(resource_id)

    def _params(self, params: dict[str, str] | None) -> dict[str, str]:
        merged = {"api-version": self.settings.api_version}
        if params:
            merged.update(params)
        return merged

    # -- Verbs ---------------------------------------------------------------

    def http_get(self, path: str, params: dict[str, str] | None = None) -> Any:
        return self.executor.request("GET", path, self._params(params))

    def http_put(self, path: str, body: Any = None, params: dict[str, str] | None = None) -> Any:
        return self.executor.request("PUT", path, self._params(params), body)

    def http_post(self, path: str, body: Any = None, params: dict[str, str] | None = None) -> Any:
        return self.executor.request("POST", path, self._params(params), body)

    def http_delete(self, path: str, params: dict[str, str] | None = None) -> Any:
        return self.executor.request("DELETE", path, self._params(params))

    # -- Resources -----------------------------------------------------------

    def get_resource_by_id(self, resource_id: str, params: dict[str, str] | None = None) -> Any:
        """Return the resource at *resource_id*, or ``None`` if it does not exist."""
        return self.http_get(resource_id, params)

    def _resource_group_path(self, name: str | None = None) -> str:
        group = name or self.settings.resource_group_name
        return f"/subscriptions/{self.settings.subscription_id}/resourceGroups/{group}"

    def get_resource_group(self, name: str | None = None) -> dict | None:
        """Return ``{id, name, location, tags, provisioning_state}`` or ``None``.

        *name* defaults to the configured resource group.
        """
        result = self.http_get(
            self._resource_group_path(name),
            {"api-version": self.settings.resource_group_api_version},
        )
        if not result:
            return None
        return _parse_resource_group(result)

    def list_resource_groups(self) -> list[dict]:
        """Return every resource group of the subscription, sorted by name."""
        path = f"/subscriptions/{self.settings.subscription_id}/resourcegroups"
        groups = _paginate(
            self.executor, path, {"api-version": self.settings.resource_group_api_version}
        )
        return sorted(
            (_parse_resource_group(g) for g in groups),
            key=lambda g: (g["name"] or "").lower(),
        )

    def create_resource_group(
        self,
        name: str,
        location: str,
        tags: dict[str, str] | None = None,
    ) -> dict | None:
        """Create or update resource group *name* in *location*."""
        body: dict[str, Any] = {"location": location}
        if tags:
            body["tags"] = tags
        logger.info("Creating resource group %s in %s", name, location)
        result = self.http_put(
            self._resource_group_path(name),
            body,
            {"api-version": self.settings.resource_group_api_version},
        )
        return _parse_resource_group(result) if result else None

    def delete_resource_group(self, name: str) -> None:
        """Request deletion of resource group *name*.

        ARM accepts the request (202) and deletes the group asynchronously.
        """
        logger.info("Deleting resource group %s", name)
        self.http_delete(
            self._resource_group_path(name),
            {"api-version": self.settings.resource_group_api_version},
        )


def _parse_resource_group(result: dict) -> dict:
    return {
        "id": result.get("id"),
        "name": result.get("name"),
        "location": result.get("location"),
        "tags": result.get("tags"),
        "provisioning_state": (result.get("properties") or {}).get("provisioningState"),
    }
