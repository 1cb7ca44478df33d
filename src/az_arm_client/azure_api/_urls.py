"""Resource path composition and resource id parsing."""

from __future__ import annotations

from typing import NamedTuple

from az_arm_client.errors import InvalidResourceId


class ResourceId(NamedTuple):
    """The components of a fully qualified ARM resource id."""

    subscription_id: str
    resource_group_name: str
    provider_name: str
    resource_type: str
    resource_name: str


def rest_api_url(
    subscription_id: str,
    default_resource_group: str,
    resource_provider: str,
    resource_type: str,
    *,
    resource_group_name: str | None = None,
    name: str | None = None,
    others: str | None = None,
) -> str:
    """Return the ARM path of a resource, relative to the management endpoint.

    *resource_group_name* falls back to *default_resource_group*.  *name* and
    *others* are appended in that order, each only when given.
    """
    group = resource_group_name or default_resource_group
    url = (
        f"/subscriptions/{subscription_id}/resourceGroups/{group}"
        f"/providers/{resource_provider}/{resource_type}"
    )
    if name:
        url += f"/{name}"
    if others:
        url += f"/{others}"
    return url


def parse_name_from_id(resource_id: str) -> ResourceId:
    """Split *resource_id* into its subscription, group, provider, type and name.

    Segments after the resource name (sub-resources) are ignored.
    """
    parts = resource_id.split("/")
    # ['', 'subscriptions', a, 'resourceGroups', b, 'providers', c, d, e, ...]
    if (
        len(parts) < 9
        or parts[0] != ""
        or parts[1].lower() != "subscriptions"
        or parts[3].lower() != "resourcegroups"
        or parts[5].lower() != "providers"
        or not all(parts[1:9])
    ):
        raise InvalidResourceId(resource_id)
    return ResourceId(
        subscription_id=parts[2],
        resource_group_name=parts[4],
        provider_name=parts[6],
        resource_type=parts[7],
        resource_name=parts[8],
    )
