import logging
from typing import TYPE_CHECKING
from .headers import (
    TRUECOLOR_BPP,
    BmpDibHeader,
    BmpHeader,
    file_size,
)

if TYPE_CHECKING:
    from ..core.image import Image

logger = logging.getLogger(__name__)


def encode_image(image: "Image") -> bytes:
    """
    Serializes an image as an uncompressed 24-bit BMP file.

    The source bit depth and palette of a decoded image are not preserved;
    every image is written as BGR truecolor rows, bottom row first.
    """
    width, height = image.width, image.height
    header_size, data_size = file_size(TRUECOLOR_BPP, width, height)
    header = BmpHeader.new(header_size, data_size)
    dib_header = BmpDibHeader.new(width, height)
    padding = bytes(width % 4)

    logger.debug(
        "Encoding %dx%d image, file_size=%d padding=%d",
        width,
        height,
        header.file_size,
        len(padding),
    )

    out = bytearray(header.pack())
    out += dib_header.pack()
    for y in range(height):
        row_start = y * width
        for px in image.data[row_start : row_start + width]:
            out += px.to_bgr()
        out += padding

    return bytes(out)
