"""Color model for LED buffers."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clamp(value: int) -> int:
    return max(0, min(255, int(value)))


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    Uses standard 8-bit RGB (0-255) as the canonical color representation.
    Device-specific channel orders are applied by the wire encoders, never
    stored here.

    The model is frozen so colors can be shared between panels and used
    as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @field_validator("r", "g", "b")
    @classmethod
    def validate_rgb(cls, v: int) -> int:
        """Ensure RGB values are in valid range."""
        if not 0 <= v <= 255:
            raise ValueError("RGB values must be between 0 and 255")
        return v

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def clamped(cls, r: int, g: int, b: int) -> "Color":
        """Create a color, clamping each channel into 0-255 instead of rejecting it.

        Example:
            >>> Color.clamped(300, -5, 128).to_rgb_tuple()
            (255, 0, 128)
        """
        return cls(r=_clamp(r), g=_clamp(g), b=_clamp(b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse 'FF0000' or '#FF0000' into a color."""
        text = value.lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Expected 6 hex digits, got {value!r}")
        return cls(r=int(text[0:2], 16), g=int(text[2:4], 16), b=int(text[4:6], 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to hex color string (e.g., '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def to_rgb(color: "Color | Sequence[int]") -> tuple[int, int, int]:
    """Normalize a Color or (r, g, b) sequence into a clamped RGB tuple.

    Content producers compute colors arithmetically and routinely overshoot,
    so values are clamped rather than validated.
    """
    if isinstance(color, Color):
        return color.to_rgb_tuple()
    r, g, b = color[0], color[1], color[2]
    return (_clamp(r), _clamp(g), _clamp(b))


# Named colors used by built-in test patterns
BLACK = Color(r=0, g=0, b=0)
RED = Color(r=255, g=0, b=0)
GREEN = Color(r=0, g=255, b=0)
BLUE = Color(r=0, g=0, b=255)
YELLOW = Color(r=255, g=255, b=0)
WHITE = Color(r=255, g=255, b=255)
