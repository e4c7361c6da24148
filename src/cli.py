#!/usr/bin/env python3
"""
CLI tool for the Vercel reconciler.
Creates, imports and deletes managed resources from the command line.
"""

import asyncio
import json
import sys

import click
import yaml
from tabulate import tabulate

from config import get_config
from errors import NotFoundError, ProviderError, ResourceError
from provider import Provider, setup_logging


def _load_provider() -> Provider:
    """Build a configured provider from the environment."""
    config = get_config()
    setup_logging(config.logging)
    provider = Provider()
    provider.configure(config)
    return provider


def _fail(error: Exception):
    if isinstance(error, ResourceError):
        click.echo(f"Error: {error.summary}: {error.detail}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _echo_state(state, output: str):
    data = state.to_dict()
    if output == "yaml":
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        click.echo(json.dumps(data, indent=2))


@click.group()
def cli():
    """Vercel reconciler CLI - manage DNS records and project domains"""
    pass


@cli.command()
def types():
    """List the supported resource types"""
    provider = Provider()
    for type_name in provider.registry.list_resource_types():
        click.echo(type_name)


@cli.command()
@click.argument("resource_type")
@click.argument("filename", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Choice(["json", "yaml"]), default="json")
def apply(resource_type, filename, output):
    """Create a resource from a YAML/JSON file"""
    with open(filename, "r") as f:
        if filename.endswith(".yaml") or filename.endswith(".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    try:
        provider = _load_provider()
        controller = provider.resource(resource_type)
        plan = controller.state_class.from_dict(data)
        state = asyncio.run(controller.create(plan))
    except (ProviderError, ValueError, KeyError) as e:
        _fail(e)

    click.echo("Resource created successfully!")
    click.echo(f"ID: {controller.identity(state)}")
    _echo_state(state, output)


@cli.command(name="import")
@click.argument("resource_type")
@click.argument("resource_id")
@click.option("--output", "-o", type=click.Choice(["json", "yaml"]), default="json")
def import_(resource_type, resource_id, output):
    """Show the state of an existing resource by its composite id"""
    try:
        provider = _load_provider()
        controller = provider.resource(resource_type)
        state = asyncio.run(controller.import_state(resource_id))
    except (ProviderError, ValueError) as e:
        _fail(e)

    _echo_state(state, output)


@cli.command()
@click.argument("resource_type")
@click.argument("resource_id")
@click.confirmation_option(prompt="Are you sure you want to delete this resource?")
def delete(resource_type, resource_id):
    """Delete a resource by its composite id"""

    async def run(controller):
        state = await controller.import_state(resource_id)
        await controller.delete(state)

    try:
        provider = _load_provider()
        controller = provider.resource(resource_type)
        asyncio.run(run(controller))
    except ResourceError as e:
        if isinstance(e.__cause__, NotFoundError):
            click.echo("Resource already deleted")
            return
        _fail(e)
    except (ProviderError, ValueError) as e:
        _fail(e)

    click.echo("Resource deleted")


@cli.command()
@click.argument("domain")
@click.option("--team-id", "-t", default=None, help="Team owning the domain")
def records(domain, team_id):
    """List the DNS records of a domain"""
    try:
        provider = _load_provider()
        result = asyncio.run(provider.client.list_dns_records(domain, team_id))
    except (ProviderError, ValueError) as e:
        _fail(e)

    headers = ["ID", "Name", "Type", "Value", "TTL"]
    rows = [[r.id, r.name or "@", r.type, r.value, r.ttl] for r in result]
    click.echo(tabulate(rows, headers=headers, tablefmt="grid"))


if __name__ == "__main__":
    cli()
