import io
import logging
import struct
from typing import BinaryIO, List, Optional, Tuple
from ..core.image import Image
from ..core.pixel import Pixel
from .bitindex import bit_index
from .errors import BmpError, BmpErrorKind
from .headers import (
    DIB_HEADER_FORMAT,
    FILE_HEADER_FORMAT,
    SUPPORTED_BPP,
    BmpDibHeader,
    BmpHeader,
    BmpVersion,
    CompressionType,
)

logger = logging.getLogger(__name__)

# On-disk size of a palette entry (blue, green, red, reserved)
_PALETTE_ENTRY_SIZE = 4


def decode_image(data: bytes) -> Image:
    """
    Decodes a complete BMP file.

    Supports uncompressed 1, 4, 8 and 24-bit images with a version 3, 4 or
    5 DIB header. Each stage raises a BmpError as soon as it fails, so no
    partially decoded image is ever returned.

    Args:
        data: Raw bytes of the BMP file.

    Returns:
        The decoded Image. Its DIB header describes the 24-bit layout the
        image will be re-encoded with, not the source layout.
    """
    stream = io.BytesIO(data)
    read_bmp_id(stream)
    header = read_bmp_header(stream)
    dib_header = read_bmp_dib_header(stream)
    color_palette = read_color_palette(stream, dib_header)

    width = abs(dib_header.width)
    height = abs(dib_header.height)
    padding = width % 4

    # A 24-bit image may carry a palette as a display hint; its pixels are
    # still stored directly.
    if color_palette is not None and dib_header.bits_per_pixel != 24:
        pixels = read_indexes(
            data,
            color_palette,
            width,
            height,
            dib_header.bits_per_pixel,
            header.pixel_offset,
        )
    else:
        pixels = read_pixels(
            stream, width, height, header.pixel_offset, padding
        )

    return Image(
        width,
        height,
        data=pixels,
        header=header,
        color_palette=color_palette,
    )


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    pos = stream.tell()
    chunk = stream.read(size)
    if len(chunk) < size:
        raise BmpError.io_error(
            EOFError(
                f"failed to fill whole buffer: needed {size} bytes at "
                f"offset {pos}, got {len(chunk)}"
            )
        )
    return chunk


def _unpack(stream: BinaryIO, fmt: str) -> Tuple:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))


def read_bmp_id(stream: BinaryIO):
    """Checks the two-byte "BM" signature."""
    magic = _read_exact(stream, 2)
    if magic != b"BM":
        raise BmpError(
            BmpErrorKind.WRONG_MAGIC_NUMBERS,
            f"Expected [66, 77], but was {list(magic)}",
        )


def read_bmp_header(stream: BinaryIO) -> BmpHeader:
    header = BmpHeader(*_unpack(stream, FILE_HEADER_FORMAT))
    logger.debug(
        "File header: file_size=%d pixel_offset=%d",
        header.file_size,
        header.pixel_offset,
    )
    return header


def read_bmp_dib_header(stream: BinaryIO) -> BmpDibHeader:
    """
    Reads the common 40-byte part of the DIB header and validates version,
    bit depth and compression, in that order.
    """
    dib_header = BmpDibHeader(*_unpack(stream, DIB_HEADER_FORMAT))
    logger.debug(
        "DIB header: size=%d width=%d height=%d bpp=%d compression=%d "
        "colors=%d",
        dib_header.header_size,
        dib_header.width,
        dib_header.height,
        dib_header.bits_per_pixel,
        dib_header.compress_type,
        dib_header.num_colors,
    )

    version = dib_header.version
    if version is None:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_HEADER,
            "Only simple BMP images of version 3, 4, and 5 are currently "
            "supported. Cannot decode the image for the following header: "
            f"{dib_header!r}",
        )
    if not version.is_supported:
        raise BmpError(BmpErrorKind.UNSUPPORTED_BMP_VERSION, version.label)

    if dib_header.bits_per_pixel not in SUPPORTED_BPP:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_BITS_PER_PIXEL,
            "Only 1, 4, 8, and 24 bits per pixel are currently supported, "
            f"was: {dib_header.bits_per_pixel}",
        )

    compression = dib_header.compression
    if compression is not CompressionType.UNCOMPRESSED:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_COMPRESSION_TYPE, compression.label
        )

    return dib_header


def read_color_palette(
    stream: BinaryIO, dib_header: BmpDibHeader
) -> Optional[List[Pixel]]:
    """
    Reads the color palette that follows the DIB header, if the image has
    one. A non-zero color count implies a palette at any bit depth.
    """
    if dib_header.num_colors != 0:
        num_entries = dib_header.num_colors
    elif dib_header.bits_per_pixel in (1, 4, 8):
        num_entries = 1 << dib_header.bits_per_pixel
    else:
        return None

    # Version 2 palettes use 3-byte entries, but that version is rejected
    # before we get here.
    if dib_header.version is BmpVersion.TWO:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_BMP_VERSION, BmpVersion.TWO.label
        )

    stream.seek(dib_header.palette_offset)
    palette = []
    for _ in range(num_entries):
        entry = _read_exact(stream, _PALETTE_ENTRY_SIZE)
        palette.append(Pixel.from_bgr(entry))

    logger.debug(
        "Read %d palette entries at offset %d",
        len(palette),
        dib_header.palette_offset,
    )
    return palette


def read_indexes(
    data: bytes,
    palette: List[Pixel],
    width: int,
    height: int,
    bits_per_pixel: int,
    offset: int,
) -> List[Pixel]:
    """Reads rows of bit-packed palette indices."""
    pixels = []
    # ceil(width / (8 / bpp)) for bpp in 1, 4, 8
    bytes_per_row = (width * bits_per_pixel + 7) // 8
    row_padding = (4 - bytes_per_row % 4) % 4
    logger.debug(
        "Indexed rows: bytes_per_row=%d padding=%d", bytes_per_row, row_padding
    )

    for y in range(height):
        start = offset + (bytes_per_row + row_padding) * y
        row = bytes(data[start : start + bytes_per_row])
        if len(row) < bytes_per_row:
            raise BmpError.io_error(
                EOFError(
                    f"Row {y} at offset {start} exceeds data length "
                    f"({len(data)})"
                )
            )
        for index in bit_index(row, bits_per_pixel, width):
            assert index < len(palette), (
                f"Palette index {index} out of range ({len(palette)} entries)"
            )
            pixels.append(palette[index])

    return pixels


def read_pixels(
    stream: BinaryIO, width: int, height: int, offset: int, padding: int
) -> List[Pixel]:
    """Reads rows of 24-bit BGR pixels."""
    pixels = []
    stream.seek(offset)
    for _ in range(height):
        row = _read_exact(stream, width * 3)
        for i in range(0, len(row), 3):
            pixels.append(Pixel.from_bgr(row[i : i + 3]))
        stream.seek(padding, io.SEEK_CUR)

    return pixels
