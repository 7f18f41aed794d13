"""Layout inspection commands."""

import click

from ledgrid.exceptions import LedGridError
from ledgrid.layouts import BUILTIN_LAYOUTS_DIR, list_layouts, load_layout

from ..display import report_error
from .common import load_config


@click.command(name="layouts")
@click.pass_context
def layouts(ctx):
    """List available layouts (user layouts shadow built-ins)."""
    try:
        config = load_config(ctx)
    except LedGridError as e:
        report_error(e, ctx.obj.get("log_path"))
        return

    names = list_layouts(config.layouts_dir)
    if not names:
        click.echo("No layouts found.")
        return

    click.echo("Available layouts:\n")
    for name in names:
        user_file = config.layouts_dir / f"{name}.json"
        source = "user" if user_file.is_file() else "built-in"
        click.echo(f"  {name:<20} ({source})")

    click.echo(f"\nUser layouts directory: {config.layouts_dir}")
    click.echo(f"Built-in layouts:       {BUILTIN_LAYOUTS_DIR}")


@click.command(name="show")
@click.argument("layout_name")
@click.pass_context
def show(ctx, layout_name: str):
    """Show the panels of LAYOUT_NAME."""
    try:
        config = load_config(ctx)
        layout = load_layout(layout_name, config.layouts_dir)
    except LedGridError as e:
        report_error(e, ctx.obj.get("log_path"))
        return

    click.echo(f"{layout.name}: {layout.title}")
    click.echo(f"Window: {layout.window_width}x{layout.window_height}, {layout.panel_count} panel(s)\n")

    for index, panel in enumerate(layout.panels):
        universe = panel.universe if panel.universe is not None else index
        flags = " mirror" if panel.mirror else ""
        click.echo(
            f"  [{index}] {panel.id:<8} {panel.device_ip:<15} "
            f"{panel.grid_size}x{panel.grid_size} ({panel.led_count} LEDs) "
            f"at ({panel.x},{panel.y}) {panel.width}x{panel.height} "
            f"cell={panel.pixel_size}px {panel.color_mapping.value} "
            f"universe={universe}{flags}"
        )
