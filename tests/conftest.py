import struct
from typing import List, Optional, Sequence, Tuple
import pytest


def build_bmp(
    width: int,
    height: int,
    rows: Sequence[bytes],
    bits_per_pixel: int = 24,
    palette: Optional[List[Tuple[int, int, int]]] = None,
    header_size: int = 40,
    compress_type: int = 0,
    num_colors: int = 0,
) -> bytes:
    """
    Assembles a BMP file. `rows` are the unpadded stored rows, bottom row
    first; `palette` entries are (r, g, b).
    """
    pixel_data = b""
    for row in rows:
        pixel_data += row + bytes((4 - len(row) % 4) % 4)

    palette_bytes = b"".join(
        bytes((b, g, r, 0)) for r, g, b in (palette or [])
    )
    dib_header = struct.pack(
        "<IiiHHIIiiII",
        header_size,
        width,
        height,
        1,
        bits_per_pixel,
        compress_type,
        len(pixel_data),
        2835,
        2835,
        num_colors,
        0,
    )
    # Trailing v4/v5 fields (masks, color space) are left zeroed
    dib_header += bytes(max(0, header_size - 40))

    pixel_offset = 14 + len(dib_header) + len(palette_bytes)
    file_header = struct.pack(
        "<2sIHHI",
        b"BM",
        pixel_offset + len(pixel_data),
        0,
        0,
        pixel_offset,
    )
    return file_header + dib_header + palette_bytes + pixel_data


@pytest.fixture
def bmp_builder():
    return build_bmp


@pytest.fixture
def rgbw_data() -> bytes:
    """
    A 2x2 24-bit image: red and lime on top, blue and white at the bottom.
    """
    bottom = bytes((255, 0, 0, 255, 255, 255))  # blue, white (BGR)
    top = bytes((0, 0, 255, 0, 255, 0))  # red, lime (BGR)
    return build_bmp(2, 2, [bottom, top])
