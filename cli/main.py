# cli/main.py
"""Main CLI entry point for the Slack node host."""

import click

from core.monitoring.logs import configure_logging


@click.group()
@click.version_option(version='1.0.0')
@click.option('--log-level', default=None, help='Log level (defaults to LOG_LEVEL setting)')
@click.option('--log-format', type=click.Choice(['console', 'json']), default=None, help='Log output format')
def cli(log_level, log_format):
    """Run workflow plugin nodes and manage their credentials."""
    configure_logging(log_level, log_format)


# Import and register command groups
def register_commands():
    """Register all CLI command groups."""
    # Plugin commands
    from cli.commands.plugin import plugin
    cli.add_command(plugin)

    # Node commands
    from cli.commands.node import node
    cli.add_command(node)

    # Credential commands
    from cli.commands.credential import credential
    cli.add_command(credential)


# Register all commands
register_commands()


if __name__ == '__main__':
    cli()
