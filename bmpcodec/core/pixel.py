from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Pixel:
    """
    A 24-bit RGB color value.

    Channels are stored as ints in the range 0..255. Values outside that
    range are truncated to their low 8 bits, so Pixel(256, 257, -1) equals
    Pixel(0, 1, 255). Pixels compare and hash by their channel values.
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        object.__setattr__(self, "r", int(self.r) & 0xFF)
        object.__setattr__(self, "g", int(self.g) & 0xFF)
        object.__setattr__(self, "b", int(self.b) & 0xFF)

    @classmethod
    def from_bgr(cls, bgr: Sequence[int]) -> "Pixel":
        """Builds a pixel from a BMP on-disk (blue, green, red) triple."""
        return cls(bgr[2], bgr[1], bgr[0])

    def to_bgr(self) -> bytes:
        return bytes((self.b, self.g, self.r))

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def __str__(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def __format__(self, format_spec: str) -> str:
        if format_spec == "x":
            return f"{self.r:02x}{self.g:02x}{self.b:02x}"
        if format_spec == "X":
            return f"{self.r:02X}{self.g:02X}{self.b:02X}"
        return format(str(self), format_spec)
