"""Command-line interface for configuration management."""

import sys

import click
import yaml

from .manager import ConfigManager, ConfigValidationError

DEFAULT_CONFIG_PATH = 'config/default.yaml'


@click.group()
def config():
    """Configuration management commands."""
    pass


@config.command()
@click.option('--config-path', '-c', default=DEFAULT_CONFIG_PATH, help='Path to configuration file')
def validate(config_path: str):
    """Validate a configuration file."""
    click.echo(f"Validating configuration: {config_path}")

    try:
        manager = ConfigManager(config_path)
        manager.load_config()
        click.echo(click.style("✓ Configuration is valid", fg='green'))

        settings = manager.get_config()
        click.echo("\nConfiguration Summary:")
        click.echo(f"  API base URL: {settings['api']['base_url']}")
        click.echo(f"  Timeout: {settings['api']['timeout']}s")
        click.echo(f"  Credentials file: {settings['api'].get('credentials_file') or 'None'}")
        click.echo(f"  Log level: {settings['logging']['level']}")

    except ConfigValidationError as e:
        click.echo(click.style("✗ Configuration validation failed:", fg='red'))
        click.echo(f"  Error: {e.message}")
        if e.field_path:
            click.echo(f"  Field: {e.field_path}")
        if e.expected_type and e.actual_value is not None:
            click.echo(f"  Expected: {e.expected_type}, Got: {e.actual_value}")
        sys.exit(1)


@config.command()
@click.option('--config-path', '-c', default=DEFAULT_CONFIG_PATH, help='Path to configuration file')
@click.option('--section', '-s', type=click.Choice(['api', 'logging']), help='Only show one section')
def show(config_path: str, section: str):
    """Show the effective configuration."""
    try:
        manager = ConfigManager(config_path)
        manager.load_config()
        data = manager.get_section(section) if section else manager.get_config()
    except ConfigValidationError as e:
        click.echo(click.style(f"✗ {e.message}", fg='red'))
        sys.exit(1)

    click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=True).rstrip())
