#!/usr/bin/env python3
"""
CLI tool for firewall rule reconciliation.

Provides create/read/update/delete/import commands for a single
Cloudflare firewall rule, addressed by a ``ZONE_ID/RULE_ID`` token.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict

import click
import yaml
from tabulate import tabulate

from clients.cloudflare import CloudflareFirewallClient
from config import get_config
from controller import FirewallRuleController
from errors import FirewallRuleError
from identifiers import build_import_token, parse_import_token
from models import DesiredState, LocalState
from validation import validate_desired_state

OUTPUT_FORMATS = ["table", "json", "yaml"]


def _build_controller() -> FirewallRuleController:
    """Build a controller backed by the configured Cloudflare client"""
    cfg = get_config()
    client = CloudflareFirewallClient.from_config(cfg.cloudflare)
    return FirewallRuleController(client)


def _load_document(filename: str) -> Dict[str, Any]:
    """Read a desired-state document from a YAML/JSON file"""
    with open(filename, "r") as f:
        if filename.endswith(".yaml") or filename.endswith(".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise click.BadParameter(
            "document must be a mapping", param_hint="FILENAME"
        )
    return data


def _load_desired_state(filename: str) -> DesiredState:
    document = _load_document(filename)
    is_valid, error = validate_desired_state(document)
    if not is_valid:
        raise click.BadParameter(error, param_hint="FILENAME")
    return DesiredState.from_dict(document)


def _run(coro):
    """Run a controller coroutine, exiting with status 1 on failure"""
    try:
        return asyncio.run(coro)
    except FirewallRuleError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _echo_state(state: LocalState, output: str) -> None:
    data = state.to_dict()
    if output == "json":
        click.echo(json.dumps(data, indent=2))
    elif output == "yaml":
        click.echo(yaml.dump(data, default_flow_style=False))
    else:
        rows = [
            [key, ", ".join(value) if isinstance(value, list) else value]
            for key, value in data.items()
        ]
        click.echo(tabulate(rows, headers=["Field", "Value"], tablefmt="grid"))


def _parse_token(token: str):
    try:
        return parse_import_token(token)
    except FirewallRuleError as e:
        raise click.BadParameter(str(e), param_hint="TOKEN")


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Firewall rule CLI - reconcile a Cloudflare firewall rule"""
    try:
        cfg = get_config()
    except ValueError as e:
        raise click.ClickException(str(e))

    logging.basicConfig(
        level=(log_level or cfg.logging.level).upper(),
        format=cfg.logging.format,
    )


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Choice(OUTPUT_FORMATS), default="table")
def create(filename, output):
    """Create a firewall rule from a YAML/JSON file"""
    desired = _load_desired_state(filename)
    controller = _build_controller()

    state = _run(controller.create(desired))

    if state is None:
        click.echo(
            "Error: rule was created but could not be read back; "
            "import it by the id in the log",
            err=True,
        )
        sys.exit(1)

    click.echo("Firewall rule created successfully!")
    _echo_state(state, output)


@cli.command()
@click.argument("token")
@click.option("--output", "-o", type=click.Choice(OUTPUT_FORMATS), default="table")
def read(token, output):
    """Show the current remote state of ZONE_ID/RULE_ID"""
    zone_id, rule_id = _parse_token(token)
    controller = _build_controller()

    state = _run(controller.read(zone_id, rule_id))

    if state is None:
        click.echo(
            f"Firewall rule {build_import_token(zone_id, rule_id)} no longer exists"
        )
        return

    _echo_state(state, output)


@cli.command()
@click.argument("token")
@click.argument("filename", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Choice(OUTPUT_FORMATS), default="table")
def update(token, filename, output):
    """Replace ZONE_ID/RULE_ID with the rule in a file"""
    zone_id, rule_id = _parse_token(token)
    desired = _load_desired_state(filename)

    if desired.zone_id != zone_id:
        raise click.BadParameter(
            f"zone_id {desired.zone_id!r} does not match {zone_id!r}",
            param_hint="FILENAME",
        )

    state = LocalState(**vars(desired), id=rule_id)
    controller = _build_controller()

    result = _run(controller.update(state))

    if result is None:
        click.echo(
            f"Error: firewall rule {build_import_token(zone_id, rule_id)} "
            "no longer exists",
            err=True,
        )
        sys.exit(1)

    click.echo("Firewall rule updated successfully!")
    _echo_state(result, output)


@cli.command()
@click.argument("token")
@click.confirmation_option(prompt="Are you sure you want to delete this rule?")
def delete(token):
    """Delete ZONE_ID/RULE_ID"""
    zone_id, rule_id = _parse_token(token)
    controller = _build_controller()

    _run(controller.delete(zone_id, rule_id))

    click.echo(f"Firewall rule {build_import_token(zone_id, rule_id)} deleted")


@cli.command(name="import")
@click.argument("token")
@click.option("--output", "-o", type=click.Choice(OUTPUT_FORMATS), default="json")
def import_(token, output):
    """Adopt an existing rule identified by ZONE_ID/RULE_ID"""
    controller = _build_controller()

    state = _run(controller.import_rule(token))

    if state is None:
        click.echo(
            f"Error: cannot import non-existent firewall rule {token}", err=True
        )
        sys.exit(1)

    _echo_state(state, output)


if __name__ == "__main__":
    cli()
