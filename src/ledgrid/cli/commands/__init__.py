"""CLI commands for ledgrid."""

from .config import config
from .layouts import layouts, show
from .run import off, test

__all__ = ["config", "layouts", "off", "show", "test"]
