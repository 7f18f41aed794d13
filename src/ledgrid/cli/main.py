"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from ledgrid import __version__
from ledgrid.models.config import LEDGRID_HOME

from .commands import config, layouts, off, show, test

logger = logging.getLogger(__name__)


def default_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where setup_logging() writes for a given set of flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "ledgrid-debug.log"
    return LEDGRID_HOME / "logs" / "ledgrid.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path]) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, log at DEBUG to ./ledgrid-debug.log
        log_file: Custom log file path (optional)

    Returns:
        Path of the log file in use
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    log_path = default_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="ledgrid")
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.ledgrid/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./ledgrid-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
def cli(
    ctx,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
):
    """
    ledgrid - drive WLED LED matrix panels over DDP or Art-Net.

    \b
    Examples:
      # List built-in and user layouts
      ledgrid layouts

      # Show the panels of a layout
      ledgrid show TwoGrids

      # Light the corners of every panel for 10 seconds
      ledgrid test FourGrids --seconds 10

      # Same over Art-Net
      ledgrid test FourGrids --protocol artnet

      # Blank all panels
      ledgrid off FourGrids

      # Write a default config file
      ledgrid config init
    """
    obj = ctx.ensure_object(dict)
    obj["config_path"] = config_path or obj.get("config_path")
    obj["log_path"] = setup_logging(verbose, debug, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(layouts)
cli.add_command(show)
cli.add_command(test)
cli.add_command(off)
cli.add_command(config)

if __name__ == "__main__":
    cli()
