# cli/commands/credential.py
"""Credential commands."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click

from cli.commands.node import load_credentials
from cli.commands.plugin import registry_for
from core.credentials.tester import verify_credentials
from core.http.client import AuthenticatedHttpClient
from core.node.errors import CredentialError


@click.group()
def credential():
    """Manage credentials."""
    pass


@credential.command(name='list')
@click.option('--plugin-dir', type=click.Path(exists=True, file_okay=False), help='Extra plugin directory')
def list_credentials(plugin_dir):
    """List credential types declared by plugins."""
    credential_types = registry_for(plugin_dir).get_credential_types()
    if not credential_types:
        click.echo("No credential types found.")
        return

    for name, credential_type in sorted(credential_types.items()):
        click.echo(f"🔑 {name}: {credential_type.display_name}")
        for prop in credential_type.properties:
            req_text = "required" if prop.required else "optional"
            click.echo(f"   • {prop.name} ({req_text}): {prop.description or prop.display_name}")


@credential.command()
@click.argument('name')
@click.option('--credentials', 'credentials_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML credentials file (defaults to settings)')
@click.option('--plugin-dir', type=click.Path(exists=True, file_okay=False), help='Extra plugin directory')
def test(name: str, credentials_file: Optional[Path], plugin_dir: Optional[str]):
    """Check stored credentials against the remote service."""
    registry = registry_for(plugin_dir)
    credential_types = registry.get_credential_types()
    credential_type = credential_types.get(name)
    if credential_type is None:
        click.echo(f"❌ Unknown credential type '{name}'", err=True)
        sys.exit(1)

    async def run_test():
        credentials = load_credentials(credentials_file)
        async with AuthenticatedHttpClient(credentials, credential_types) as client:
            return await verify_credentials(client, credential_type)

    try:
        result = asyncio.run(run_test())
    except CredentialError as e:
        click.echo(f"❌ {name}: {e}", err=True)
        sys.exit(1)

    if result.ok:
        click.echo(f"✅ {name}: {result.message}")
    else:
        click.echo(f"❌ {name}: {result.message}", err=True)
        sys.exit(1)
