"""Console error reporting shared by CLI commands."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ledgrid.exceptions import format_error_for_display

logger = logging.getLogger(__name__)


def report_error(error: Exception, log_path: Optional[Path] = None, exit_code: int = 1) -> None:
    """Print a user-facing error with its recovery hint, then exit."""
    logger.error(f"Command failed: {error}", exc_info=not hasattr(error, "user_message"))

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)

    sys.exit(exit_code)
