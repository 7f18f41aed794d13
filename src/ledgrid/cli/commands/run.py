"""Commands that drive the panels."""

import logging
import threading
from typing import Optional

import click

from ledgrid.compositor import CornerTestPattern, FrameLoop, LedGrid, SolidColor
from ledgrid.exceptions import LedGridError
from ledgrid.models import Color

from ..display import report_error
from .common import PROTOCOL_CHOICE, load_config, resolve_layout

logger = logging.getLogger(__name__)


@click.command(name="test")
@click.argument("layout_name", required=False)
@click.option('--protocol', '-p', type=PROTOCOL_CHOICE, default=None,
              help='Wire protocol (default: from config)')
@click.option('--seconds', '-s', type=click.FloatRange(min=0), default=5.0, show_default=True,
              help='How long to run the pattern')
@click.option('--fps', type=click.IntRange(min=1, max=240), default=None,
              help='Frames per second (default: from config)')
@click.option('--color', 'hex_color', type=str, default=None,
              help='Fill panels with this hex color instead of the corner pattern')
@click.pass_context
def test(ctx, layout_name: Optional[str], protocol: Optional[str], seconds: float,
         fps: Optional[int], hex_color: Optional[str]):
    """
    Send a test pattern to every panel of LAYOUT_NAME.

    The default pattern lights each panel's corners: top-left red,
    top-right green, bottom-left blue, bottom-right yellow. Panels are
    turned off afterwards.

    Press Ctrl+C to stop early.
    """
    log_path = ctx.obj.get("log_path")
    try:
        config = load_config(ctx, protocol)
        layout = resolve_layout(config, layout_name)
        producer = SolidColor(Color.from_hex(hex_color)) if hex_color else CornerTestPattern()
    except (LedGridError, ValueError) as e:
        report_error(e, log_path)
        return

    frame_rate = fps or config.target_fps
    click.echo(
        f"Sending test pattern to '{layout.name}' ({layout.panel_count} panel(s)) "
        f"over {config.protocol.display_name} at {frame_rate} fps for {seconds:g}s"
    )

    grid = LedGrid(layout, config=config, socket_factory=ctx.obj.get("socket_factory"))
    try:
        grid.connect()
        loop = FrameLoop(grid, producer, fps=frame_rate)
        try:
            sent = loop.run_for(seconds)
        except KeyboardInterrupt:
            loop.stop()
            sent = loop.frames_sent
            click.echo("\nInterrupted")

        click.echo(f"Sent {sent} frame(s), {loop.failed_frames} with errors")
        turned_off = grid.turn_off_all()
    except LedGridError as e:
        report_error(e, log_path)
        return
    finally:
        grid.close()

    if not turned_off:
        click.echo("[FAIL] Some panels did not acknowledge turn off", err=True)
        ctx.exit(1)
    click.echo("[OK] Panels turned off")


@click.command(name="off")
@click.argument("layout_name", required=False)
@click.option('--protocol', '-p', type=PROTOCOL_CHOICE, default=None,
              help='Wire protocol (default: from config)')
@click.pass_context
def off(ctx, layout_name: Optional[str], protocol: Optional[str]):
    """Turn off every panel of LAYOUT_NAME."""
    log_path = ctx.obj.get("log_path")
    try:
        config = load_config(ctx, protocol)
        layout = resolve_layout(config, layout_name)
    except LedGridError as e:
        report_error(e, log_path)
        return

    grid = LedGrid(layout, config=config, socket_factory=ctx.obj.get("socket_factory"))
    try:
        grid.connect()
        stop_event = threading.Event()
        results: list[bool] = []
        worker = grid.start_turn_off(stop_event, on_complete=results.append)
        try:
            worker.join()
        except KeyboardInterrupt:
            stop_event.set()
            worker.join()
    except LedGridError as e:
        report_error(e, log_path)
        return
    finally:
        grid.close()

    if not (results and results[0]):
        click.echo(
            f"[FAIL] Turn off was not delivered to every panel of '{layout.name}'", err=True
        )
        ctx.exit(1)
    click.echo(f"[OK] Sent turn off to {layout.panel_count} panel(s) of '{layout.name}'")
