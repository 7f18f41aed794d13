"""Configuration commands."""

import click

from ledgrid.exceptions import LedGridError
from ledgrid.models import AppConfig
from ledgrid.models.config import DEFAULT_CONFIG_PATH

from ..display import report_error


@click.group(name="config")
def config():
    """Show or create the ledgrid configuration."""
    pass


@config.command(name="show")
@click.pass_context
def show_config(ctx):
    """Display configuration values."""
    path = ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH
    try:
        app_config = AppConfig.load_or_default(path)
    except LedGridError as e:
        report_error(e, ctx.obj.get("log_path"))
        return

    source = path if path.exists() else f"{path} (not found, showing defaults)"
    click.echo(f"Config: {source}\n")
    for name, field in AppConfig.model_fields.items():
        value = getattr(app_config, name)
        if hasattr(value, "value"):
            value = value.value
        click.echo(f"  {name:<20} {value}")
        if field.description:
            click.echo(f"  {'':<20} {field.description}")


@config.command(name="init")
@click.option('--force', is_flag=True, help='Overwrite an existing file (a .bak copy is kept)')
@click.pass_context
def init_config(ctx, force: bool):
    """Write a config file with default values."""
    path = ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH
    if path.exists() and not force:
        click.echo(f"Config already exists: {path} (use --force to overwrite)")
        return

    try:
        AppConfig().save(path)
    except (LedGridError, OSError) as e:
        report_error(e, ctx.obj.get("log_path"))
        return

    click.echo(f"[OK] Wrote default config to {path}")
