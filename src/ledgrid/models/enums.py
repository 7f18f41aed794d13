"""Enumerations for LED panel output."""

from enum import Enum

import numpy as np
import numpy.typing as npt


class ColorMapping(str, Enum):
    """Channel order a panel's LEDs expect on the wire.

    The name spells the canonical channel written at each wire position:
    GBR sends green first, then blue, then red. All six permutations of
    R, G, B are covered, which covers every physically wired LED strip.
    """

    RGB = "RGB"
    BGR = "BGR"
    GRB = "GRB"
    RBG = "RBG"
    BRG = "BRG"
    GBR = "GBR"

    @classmethod
    def _missing_(cls, value):
        # Accept "gbr" from hand-written layout files
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None

    @property
    def source_order(self) -> tuple[int, int, int]:
        """Canonical channel index (0=R, 1=G, 2=B) sampled for wire positions 0, 1, 2."""
        return tuple("RGB".index(letter) for letter in self.value)

    @property
    def description(self) -> str:
        """Human-readable channel order, e.g. 'Green, Blue, Red'."""
        names = {"R": "Red", "G": "Green", "B": "Blue"}
        return ", ".join(names[letter] for letter in self.value)

    def map_channel(self, pixel, position: int) -> int:
        """
        Return the source value written at a wire position.

        Args:
            pixel: Canonical (r, g, b) triple
            position: Wire position 0, 1 or 2

        Returns:
            Source channel value clamped to 0-255. Unknown positions read the
            red channel instead of raising.
        """
        if 0 <= position < 3:
            source = self.source_order[position]
        else:
            source = 0
        return max(0, min(255, int(pixel[source])))

    def apply(self, pixels: npt.ArrayLike) -> npt.NDArray[np.uint8]:
        """
        Reorder an (N, 3) array of canonical RGB pixels into wire order.

        Values are clamped to 0-255 before conversion to bytes.
        """
        array = np.asarray(pixels).reshape(-1, 3)
        clipped = np.clip(array, 0, 255).astype(np.uint8)
        return clipped[:, list(self.source_order)]

    def inverse(self) -> "ColorMapping":
        """Return the mapping that turns wire-order bytes back into RGB."""
        order = self.source_order
        inverse_order = [0, 0, 0]
        for position, source in enumerate(order):
            inverse_order[source] = position
        for mapping in ColorMapping:
            if mapping.source_order == tuple(inverse_order):
                return mapping
        raise ValueError(f"No inverse for {self.value}")


class DeviceProtocol(str, Enum):
    """Wire protocol used to reach a panel."""

    DDP = "ddp"  # Pixel streaming, fragmented, sequenced
    ARTNET = "artnet"  # ArtDMX, one universe per panel

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.lower().replace("-", "")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def display_name(self) -> str:
        """Human-readable protocol name."""
        return {
            DeviceProtocol.DDP: "DDP",
            DeviceProtocol.ARTNET: "Art-Net",
        }[self]
