"""Configuration-related exceptions.

This module defines exceptions for configuration errors:
- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: Config file has invalid syntax
- ConfigValidationError: Config values fail validation
- LayoutNotFoundError: Named layout does not exist
"""

from typing import Any

from .base import LedGridError


class ConfigurationError(LedGridError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid config file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common JSON errors:\n"
        recovery += "  - Trailing commas (remove commas after last item)\n"
        recovery += "  - Missing quotes around strings\n"
        recovery += "  - Unclosed braces or brackets\n"
        recovery += f"  - Edit: {file_path}"

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        # Field-specific hints
        if "color_mapping" in field.lower():
            recovery += "\nValid color mappings: RGB, BGR, GRB, RBG, BRG, GBR"
        elif "protocol" in field.lower():
            recovery += "\nValid protocols: ddp, artnet"
        elif "panels" in field.lower():
            recovery += "\nRun 'ledgrid show <layout>' to inspect a working layout"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.field = field
        self.value = value
        self.file_path = file_path


class LayoutNotFoundError(ConfigurationError):
    """Requested layout does not exist."""

    def __init__(self, name: str, searched: list[str] | None = None):
        """
        Initialize layout-not-found error.

        Args:
            name: Layout name that was requested
            searched: Locations that were searched
        """
        technical = f"Layout '{name}' not found"
        if searched:
            technical += f" (searched: {', '.join(searched)})"

        super().__init__(
            user_message=f"Layout '{name}' not found.",
            technical_message=technical,
            recoverable=True,
            recovery_hint="Run 'ledgrid layouts' to see available layouts.",
        )
        self.name = name
