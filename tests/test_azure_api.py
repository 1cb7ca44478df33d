"""Tests for resource path and resource id helpers."""

import pytest

from az_arm_client.azure_api import ResourceId, parse_name_from_id, rest_api_url
from az_arm_client.errors import InvalidResourceId

SUBSCRIPTION_ID = "fake-subscription-id"
DEFAULT_RESOURCE_GROUP = "fake-default-group"


class TestRestApiUrl:
    """URL composition through the client, which supplies subscription and default group."""

    def test_all_parameters(self, azure_client) -> None:
        url = azure_client.rest_api_url(
            "a", "b", resource_group_name="e", name="c", others="d"
        )
        assert url == f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/e/providers/a/b/c/d"

    def test_default_resource_group(self, azure_client) -> None:
        url = azure_client.rest_api_url("a", "b", name="c", others="d")
        assert url == (
            f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{DEFAULT_RESOURCE_GROUP}"
            "/providers/a/b/c/d"
        )

    def test_without_name(self, azure_client) -> None:
        url = azure_client.rest_api_url("a", "b", resource_group_name="e", others="d")
        assert url == f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/e/providers/a/b/d"

    def test_without_others(self, azure_client) -> None:
        url = azure_client.rest_api_url("a", "b", resource_group_name="e", name="c")
        assert url == f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/e/providers/a/b/c"

    def test_only_provider_and_type(self, azure_client) -> None:
        url = azure_client.rest_api_url("a", "b")
        assert url == (
            f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{DEFAULT_RESOURCE_GROUP}"
            "/providers/a/b"
        )

    def test_module_function_is_pure(self) -> None:
        assert rest_api_url("sub", "grp", "Microsoft.Network", "virtualNetworks") == (
            "/subscriptions/sub/resourceGroups/grp/providers/Microsoft.Network/virtualNetworks"
        )


class TestParseNameFromId:
    """Resource id decomposition."""

    def test_empty_id(self) -> None:
        with pytest.raises(InvalidResourceId, match='"" is not a valid URL.'):
            parse_name_from_id("")

    def test_missing_resource_name(self) -> None:
        resource_id = "/subscriptions/a/resourceGroups/b/providers/c/d"
        with pytest.raises(InvalidResourceId) as exc_info:
            parse_name_from_id(resource_id)
        assert exc_info.value.resource_id == resource_id
        assert f'"{resource_id}" is not a valid URL.' in str(exc_info.value)

    def test_full_id(self) -> None:
        result = parse_name_from_id("/subscriptions/a/resourceGroups/b/providers/c/d/e")
        assert result == ResourceId(
            subscription_id="a",
            resource_group_name="b",
            provider_name="c",
            resource_type="d",
            resource_name="e",
        )

    def test_trailing_segments_ignored(self) -> None:
        result = parse_name_from_id("/subscriptions/a/resourceGroups/b/providers/c/d/e/f")
        assert result._asdict() == {
            "subscription_id": "a",
            "resource_group_name": "b",
            "provider_name": "c",
            "resource_type": "d",
            "resource_name": "e",
        }

    def test_keywords_case_insensitive(self) -> None:
        result = parse_name_from_id("/subscriptions/a/resourcegroups/b/providers/c/d/e")
        assert result.resource_group_name == "b"

    @pytest.mark.parametrize(
        "resource_id",
        [
            "subscriptions/a/resourceGroups/b/providers/c/d/e",
            "/subscriptions/a/resourceGroups//providers/c/d/e",
            "/subscriptions/a/groups/b/providers/c/d/e",
            "/subscriptions/a/resourceGroups/b/foo/bar/foo",
        ],
    )
    def test_malformed_ids(self, resource_id: str) -> None:
        with pytest.raises(InvalidResourceId):
            parse_name_from_id(resource_id)

    def test_invalid_id_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_name_from_id("/subscriptions/a")

    def test_client_exposes_parser(self, azure_client) -> None:
        parsed = azure_client.parse_name_from_id(
            "/subscriptions/s/resourceGroups/g/providers/Microsoft.Compute/virtualMachines/vm"
        )
        assert parsed.resource_name == "vm"
        assert parsed.provider_name == "Microsoft.Compute"
