# cli/commands/node.py
"""Node execution commands."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from cli.commands.plugin import registry_for
from core.credentials.store import CredentialStore
from core.http.client import AuthenticatedHttpClient
from core.node.errors import NodeError
from core.node.runner import run_node


def parse_params(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    """Turn ``name=value`` pairs into a parameter mapping."""
    params: Dict[str, Any] = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise click.BadParameter(f"Expected name=value, got '{pair}'", param_hint='--param')
        params[name.strip()] = value
    return params


def load_items(path: Optional[Path]) -> List[Any]:
    """Read the input batch; a single empty item when no file is given."""
    if path is None:
        return [{}]
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except ValueError as e:
        raise click.BadParameter(f"Items file is not valid JSON: {e}", param_hint='--items')
    if not isinstance(data, list):
        raise click.BadParameter("Items file must contain a JSON list", param_hint='--items')
    return data


def load_credentials(path: Optional[Path]) -> CredentialStore:
    if path is not None:
        return CredentialStore.from_file(path)
    return CredentialStore.from_settings()


@click.group()
def node():
    """Run plugin nodes."""
    pass


@node.command()
@click.argument('plugin_name')
@click.argument('node_name')
@click.option('--param', '-p', 'params', multiple=True, help='Node parameter as name=value (repeatable)')
@click.option('--items', 'items_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON file holding a list of input items')
@click.option('--credentials', 'credentials_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML credentials file (defaults to settings)')
@click.option('--continue-on-fail', is_flag=True, help='Emit per-item errors instead of stopping')
@click.option('--plugin-dir', type=click.Path(exists=True, file_okay=False), help='Extra plugin directory')
def run(plugin_name: str, node_name: str, params: Tuple[str, ...], items_file: Optional[Path],
        credentials_file: Optional[Path], continue_on_fail: bool, plugin_dir: Optional[str]):
    """Execute a node once over a batch of items and print its output."""
    parameters = parse_params(params)
    items = load_items(items_file)

    registry = registry_for(plugin_dir)
    try:
        node_instance = registry.get_node(plugin_name, node_name)
    except ValueError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    async def execute_node():
        credentials = load_credentials(credentials_file)
        async with AuthenticatedHttpClient(credentials, registry.get_credential_types()) as client:
            return await run_node(
                node_instance,
                items,
                parameters,
                send_authenticated=client.request,
                continue_on_fail=continue_on_fail,
            )

    try:
        result = asyncio.run(execute_node())
    except NodeError as e:
        location = f" (item {e.item_index})" if e.item_index is not None else ""
        click.echo(f"❌ Node execution failed{location}: {e}", err=True)
        sys.exit(1)

    output = [[data.to_dict() for data in branch] for branch in result]
    click.echo(json.dumps(output, indent=2))
