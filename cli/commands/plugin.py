# cli/commands/plugin.py
"""Plugin management commands."""

import click
from pathlib import Path
import yaml
import json
from typing import Optional

from plugins.registry import BUILTIN_PLUGIN_DIR, PluginRegistry, plugin_registry


def registry_for(plugin_dir: Optional[str]) -> PluginRegistry:
    """Global registry, or one that also scans ``plugin_dir``."""
    if not plugin_dir:
        return plugin_registry
    return PluginRegistry([BUILTIN_PLUGIN_DIR, Path(plugin_dir)])


@click.group()
def plugin():
    """Manage plugins."""
    pass


@plugin.command(name='list')
@click.option('--format', 'output_format', type=click.Choice(['table', 'yaml', 'json']), default='table', help='Output format')
@click.option('--plugin-dir', type=click.Path(exists=True, file_okay=False), help='Extra plugin directory')
def list_plugins(output_format, plugin_dir):
    """List all available plugins."""
    plugins = registry_for(plugin_dir).list_plugins()

    if output_format == 'yaml':
        click.echo(yaml.dump(plugins, default_flow_style=False, sort_keys=False))
        return

    if output_format == 'json':
        click.echo(json.dumps(plugins, indent=2))
        return

    if not plugins:
        click.echo("No plugins found.")
        return

    click.echo("Available plugins:")
    click.echo("-" * 80)

    for plugin_info in plugins:
        if plugin_info['status'] != 'loaded':
            click.echo(f"❌ {plugin_info['name']}: {plugin_info['description']}")
            click.echo()
            continue

        click.echo(f"📦 {plugin_info['name']} (v{plugin_info['version']})")
        click.echo(f"   Description: {plugin_info['description']}")
        if plugin_info.get('author'):
            click.echo(f"   Author: {plugin_info['author']}")
        if plugin_info['nodes']:
            click.echo(f"   Nodes: {', '.join(plugin_info['nodes'])}")
        if plugin_info['credentials']:
            click.echo(f"   Credentials: {', '.join(plugin_info['credentials'])}")
        if plugin_info['dependencies']:
            click.echo(f"   Dependencies: {', '.join(plugin_info['dependencies'])}")
        click.echo()


@plugin.command()
@click.argument('plugin_name')
@click.argument('node_name')
@click.option('--plugin-dir', type=click.Path(exists=True, file_okay=False), help='Extra plugin directory')
def info(plugin_name, node_name, plugin_dir):
    """Show the parameters a node accepts."""
    registry = registry_for(plugin_dir)
    found = registry.get_plugin(plugin_name)
    if not found:
        click.echo(f"Plugin '{plugin_name}' not found.")
        available = [p['name'] for p in registry.list_plugins()]
        if available:
            click.echo(f"Available plugins: {', '.join(available)}")
        return

    try:
        description = found.get_node_description(node_name)
    except ValueError as e:
        click.echo(f"❌ {e}", err=True)
        return

    click.echo(f"🔧 {description.display_name} (v{description.version})")
    if description.description:
        click.echo(f"Description: {description.description}")
    if description.credentials:
        click.echo(f"Credentials: {', '.join(c.name for c in description.credentials)}")

    click.echo(f"\nParameters ({len(description.properties)}):")
    for prop in description.properties:
        req_text = "required" if prop.required else "optional"
        default_text = f", default: {prop.default!r}" if prop.default not in (None, "") else ""
        click.echo(f"  • {prop.name} ({prop.type.value}, {req_text}{default_text}): {prop.description or prop.display_name}")
        if prop.display_options and prop.display_options.show:
            conditions = "; ".join(
                f"{key} in {values}" for key, values in prop.display_options.show.items()
            )
            click.echo(f"      shown when {conditions}")
        if prop.options:
            click.echo(f"      options: {', '.join(str(v) for v in prop.option_values())}")
