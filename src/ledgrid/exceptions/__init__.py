"""
Custom exception hierarchy for ledgrid.

## Exception Hierarchy

```
LedGridError (base)
├── DeviceError
│   ├── NotConnectedError
│   └── ProtocolError
└── ConfigurationError
    ├── ConfigFileInvalidError
    ├── ConfigValidationError
    └── LayoutNotFoundError
```

All custom exceptions inherit from `LedGridError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

Transient socket failures are deliberately NOT part of this hierarchy:
channels report them as a ``False`` return value.

See `ledgrid.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import LedGridError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    LayoutNotFoundError,
)
from .device import DeviceError, NotConnectedError, ProtocolError
from .handlers import (
    ErrorCollector,
    ErrorContext,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
)

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "LayoutNotFoundError",
    # Device
    "DeviceError",
    "NotConnectedError",
    "ProtocolError",
    # Handlers
    "ErrorCollector",
    "ErrorContext",
    "collect_errors",
    "format_error_for_display",
    "wrap_pydantic_error",
    # Base
    "LedGridError",
]
