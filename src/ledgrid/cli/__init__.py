"""Command line interface for ledgrid."""

from .main import cli

__all__ = ["cli"]
