"""Helpers shared by the CLI commands."""

from typing import Optional

import click

from ledgrid.layouts import load_layout
from ledgrid.models import AppConfig, DeviceProtocol, LayoutModel

PROTOCOL_CHOICE = click.Choice([p.value for p in DeviceProtocol], case_sensitive=False)


def load_config(ctx: click.Context, protocol: Optional[str] = None) -> AppConfig:
    """Load AppConfig for this invocation, applying a --protocol override."""
    config = AppConfig.load_or_default(ctx.obj.get("config_path"))
    if protocol:
        config = config.model_copy(update={"protocol": DeviceProtocol(protocol)})
    return config


def resolve_layout(config: AppConfig, name: Optional[str]) -> LayoutModel:
    """Load a layout by name, falling back to the configured default."""
    return load_layout(name or config.default_layout, config.layouts_dir)
