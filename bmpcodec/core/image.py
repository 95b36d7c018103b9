import logging
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union
import numpy as np
from ..bmp.encoder import encode_image
from ..bmp.headers import (
    TRUECOLOR_BPP,
    BmpDibHeader,
    BmpHeader,
    file_size,
)
from .pixel import Pixel

logger = logging.getLogger(__name__)


class ImageIndex:
    """
    A restartable row-major sequence of (x, y) coordinates, starting at the
    top-left corner.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def __len__(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return f"ImageIndex(width={self.width}, height={self.height})"


class Image:
    """
    An in-memory RGB image.

    Pixels are stored in a flat buffer in BMP order: the first `width`
    entries hold the bottom row. The accessors use logical coordinates with
    y=0 at the top.
    """

    def __init__(
        self,
        width: int,
        height: int,
        data: Optional[List[Pixel]] = None,
        header: Optional[BmpHeader] = None,
        color_palette: Optional[List[Pixel]] = None,
    ):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size {width}x{height}")
        if data is None:
            data = [Pixel(0, 0, 0)] * (width * height)
        elif len(data) != width * height:
            raise ValueError(
                f"Expected {width * height} pixels for a {width}x{height} "
                f"image, got {len(data)}"
            )
        if header is None:
            header = BmpHeader.new(*file_size(TRUECOLOR_BPP, width, height))

        self.header = header
        self.dib_header = BmpDibHeader.new(width, height)
        self.color_palette = color_palette
        self.width = width
        self.height = height
        self.padding = width % 4
        self.data = data

    @classmethod
    def new(cls, width: int, height: int) -> "Image":
        """Creates an all-black image with no palette."""
        return cls(width, height)

    def get_width(self) -> int:
        return self.width

    def get_height(self) -> int:
        return self.height

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside a "
                f"{self.width}x{self.height} image"
            )
        return (self.height - y - 1) * self.width + x

    def get_pixel(self, x: int, y: int) -> Pixel:
        return self.data[self._offset(x, y)]

    def set_pixel(self, x: int, y: int, value: Pixel):
        self.data[self._offset(x, y)] = value

    def coordinates(self) -> ImageIndex:
        return ImageIndex(self.width, self.height)

    def to_bytes(self) -> bytes:
        """Encodes the image as an uncompressed 24-bit BMP file."""
        return encode_image(self)

    def to_writer(self, destination: BinaryIO):
        destination.write(self.to_bytes())

    def save(self, path: Union[str, Path]):
        data = self.to_bytes()
        with open(path, "wb") as f:
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def to_array(self) -> np.ndarray:
        """
        Returns the pixels as a (height, width, 3) uint8 RGB array with the
        top row first.
        """
        flat = np.array(
            [p.as_tuple() for p in self.data], dtype=np.uint8
        ).reshape(self.height, self.width, 3)
        return np.ascontiguousarray(flat[::-1])

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Image":
        """
        Builds an image from a (height, width, 3) RGB array, top row first.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(
                f"Expected an array of shape (height, width, 3), "
                f"got {array.shape}"
            )
        height, width = array.shape[:2]
        rows = array[::-1].reshape(-1, 3).astype(np.uint8)
        data = [Pixel(r, g, b) for r, g, b in rows.tolist()]
        return cls(width, height, data=data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self.header == other.header
            and self.dib_header == other.dib_header
            and self.color_palette == other.color_palette
            and self.width == other.width
            and self.height == other.height
            and self.padding == other.padding
            and self.data == other.data
        )

    def __repr__(self) -> str:
        palette = (
            len(self.color_palette) if self.color_palette is not None else None
        )
        return (
            f"Image(width={self.width}, height={self.height}, "
            f"padding={self.padding}, palette={palette})"
        )
