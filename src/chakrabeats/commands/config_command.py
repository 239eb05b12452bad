"""
Configuration management CLI command.

This module provides click commands for inspecting and editing the
chakrabeats engine and output configuration.
"""

import json
from dataclasses import asdict
from typing import Any

import click

from ..config import get_config_manager

_INT_FIELDS = {"output.sample_rate", "output.block_size", "output.fft_size"}
_FLOAT_FIELDS = {
    "engine.floor_hz",
    "engine.ceiling_hz",
    "engine.min_offset_hz",
    "engine.max_offset_hz",
    "engine.default_gain",
    "engine.default_base_hz",
    "engine.default_offset_hz",
}


@click.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
def show(output_format: str) -> None:
    """Show current configuration."""
    manager = get_config_manager()
    config = manager.get_config()

    if output_format == "json":
        click.echo(json.dumps(asdict(config), indent=2))
        return

    click.echo("Current Configuration:")
    click.echo(f"  Config File: {manager.get_config_path()}")
    click.echo(f"  Last Updated: {config.last_updated}")
    click.echo()

    click.echo("Engine Settings:")
    click.echo(f"  Convention: {config.engine.convention}")
    click.echo(f"  Audible Floor: {config.engine.floor_hz} Hz")
    click.echo(f"  Upper Bound: {config.engine.ceiling_hz} Hz")
    click.echo(
        f"  Offset Range: {config.engine.min_offset_hz}-{config.engine.max_offset_hz} Hz"
    )
    click.echo(f"  Default Gain: {config.engine.default_gain}")
    click.echo(f"  Default Base: {config.engine.default_base_hz} Hz")
    click.echo(f"  Default Offset: {config.engine.default_offset_hz} Hz")
    click.echo()

    click.echo("Output Settings:")
    click.echo(f"  Sample Rate: {config.output.sample_rate} Hz")
    click.echo(f"  Block Size: {config.output.block_size} frames")
    click.echo(f"  Device: {config.output.device if config.output.device is not None else 'default'}")
    click.echo(f"  FFT Size: {config.output.fft_size}")


@config.command()
@click.argument("key")
@click.argument("value")
def set(key: str, value: str) -> None:
    """Set a configuration value."""
    manager = get_config_manager()

    try:
        previous = manager.get_value(key)
    except KeyError:
        click.echo(f"Configuration key '{key}' not found", err=True)
        raise click.Abort()

    try:
        parsed_value = _parse_config_value(key, value)
    except ValueError as e:
        click.echo(f"Invalid value for {key}: {e}", err=True)
        raise click.Abort()

    _, known_issues = manager.validate_config()
    manager.update_config(**{key: parsed_value})
    _, issues = manager.validate_config()
    new_issues = [issue for issue in issues if issue not in known_issues]
    if new_issues:
        manager.update_config(**{key: previous})
        click.echo(f"Invalid value for {key}, keeping {previous}:", err=True)
        for issue in new_issues:
            click.echo(f"  - {issue}", err=True)
        raise click.Abort()

    click.echo(f"Set {key} = {parsed_value}")


@config.command()
@click.argument("key")
def get(key: str) -> None:
    """Get a configuration value."""
    manager = get_config_manager()

    try:
        value = manager.get_value(key)
    except KeyError:
        click.echo(f"Configuration key '{key}' not found", err=True)
        raise click.Abort()
    click.echo(f"{key} = {value}")


@config.command()
def validate() -> None:
    """Validate current configuration."""
    manager = get_config_manager()
    is_valid, issues = manager.validate_config()

    if is_valid:
        click.echo("✓ Configuration is valid")
    else:
        click.echo("✗ Configuration has issues:")
        for issue in issues:
            click.echo(f"  - {issue}")
        raise click.Abort()


@config.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def reset(yes: bool) -> None:
    """Reset configuration to defaults."""
    if yes or click.confirm("Are you sure you want to reset configuration to defaults?"):
        get_config_manager().reset_config()
        click.echo("Configuration reset to defaults")
    else:
        click.echo("Configuration reset cancelled")


@config.command()
def path() -> None:
    """Show the configuration file path."""
    click.echo(str(get_config_manager().get_config_path()))


def _parse_config_value(key: str, value: str) -> Any:
    """Parse configuration value based on key."""
    if key in _INT_FIELDS:
        return int(value)
    if key in _FLOAT_FIELDS:
        return float(value)
    if key == "output.device":
        if value.lower() in ("none", "default", ""):
            return None
        return int(value) if value.isdigit() else value
    return value


if __name__ == "__main__":
    config()
