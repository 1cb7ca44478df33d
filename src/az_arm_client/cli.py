"""Command-line interface for az-arm-client.

Provides subcommands that print ARM responses as JSON:
    az-arm-client get <resource-id>        – fetch any resource by id
    az-arm-client resource-group [NAME]    – show a resource group
    az-arm-client list-resource-groups     – list all resource groups
    az-arm-client parse-id <resource-id>   – split a resource id into parts

Credentials come from ``AZURE_*`` environment variables or a ``.env`` file.
"""

import json
import logging
from typing import Any

import click
from pydantic import ValidationError

from az_arm_client import __version__
from az_arm_client.azure_api import parse_name_from_id
from az_arm_client.client import AzureClient
from az_arm_client.errors import AzureError


def _setup_logging(level: int = logging.WARNING) -> None:
    """Configure the ``az_arm_client`` logger to write to stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s - %(message)s"))
    app_logger = logging.getLogger("az_arm_client")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Silence noisy third-party loggers
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, sort_keys=True))


def _make_client(ctx: click.Context) -> AzureClient:
    if "client" not in ctx.obj:
        try:
            ctx.obj["client"] = AzureClient()
        except ValidationError as exc:
            raise click.UsageError(str(exc)) from exc
    return ctx.obj["client"]


@click.group()
@click.version_option(version=__version__, prog_name="az-arm-client")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Azure Resource Manager REST client."""
    ctx.ensure_object(dict)
    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("resource_id")
@click.option("--api-version", default=None, help="ARM API version for the resource type.")
@click.pass_context
def get(ctx: click.Context, resource_id: str, api_version: str | None) -> None:
    """Fetch a resource by its full id."""
    client = _make_client(ctx)
    params = {"api-version": api_version} if api_version else None
    try:
        result = client.get_resource_by_id(resource_id, params)
    except AzureError as exc:
        raise click.ClickException(str(exc)) from exc
    if result is None:
        click.echo(f"Resource not found: {resource_id}", err=True)
        ctx.exit(1)
    _echo_json(result)


@cli.command("resource-group")
@click.argument("name", required=False)
@click.pass_context
def resource_group(ctx: click.Context, name: str | None) -> None:
    """Show a resource group (defaults to AZURE_RESOURCE_GROUP_NAME)."""
    client = _make_client(ctx)
    try:
        result = client.get_resource_group(name)
    except AzureError as exc:
        raise click.ClickException(str(exc)) from exc
    if result is None:
        group = name or client.settings.resource_group_name
        click.echo(f"Resource group not found: {group}", err=True)
        ctx.exit(1)
    _echo_json(result)


@cli.command("list-resource-groups")
@click.pass_context
def list_resource_groups(ctx: click.Context) -> None:
    """List the resource groups of the subscription."""
    client = _make_client(ctx)
    try:
        _echo_json(client.list_resource_groups())
    except AzureError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("parse-id")
@click.argument("resource_id")
def parse_id(resource_id: str) -> None:
    """Split a resource id into subscription, group, provider, type and name."""
    try:
        parsed = parse_name_from_id(resource_id)
    except AzureError as exc:
        raise click.BadParameter(str(exc), param_hint="RESOURCE_ID") from exc
    _echo_json(parsed._asdict())
