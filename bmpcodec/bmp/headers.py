import struct
from dataclasses import dataclass, astuple
from enum import Enum
from typing import Optional, Tuple

# Size of the "BM" signature plus the file header fields
BMP_HEADER_SIZE = 14

# DIB header sizes
_BITMAPCOREHEADER_SIZE = 12
_BITMAPINFOHEADER_SIZE = 40
_BITMAPV4HEADER_SIZE = 108
_BITMAPV5HEADER_SIZE = 124

# Encoder output is always an uncompressed BITMAPINFOHEADER file
TRUECOLOR_BPP = 24
DEFAULT_RESOLUTION = 1000

SUPPORTED_BPP = (1, 4, 8, 24)

# Layouts after the "BM" signature
FILE_HEADER_FORMAT = "<IHHI"
DIB_HEADER_FORMAT = "<IiiHHIIiiII"


class BmpVersion(Enum):
    TWO = "BMP Version 2"
    THREE = "BMP Version 3"
    THREE_NT = "BMP Version 3 NT"
    FOUR = "BMP Version 4"
    FIVE = "BMP Version 5"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_supported(self) -> bool:
        return self in (BmpVersion.THREE, BmpVersion.FOUR, BmpVersion.FIVE)

    @classmethod
    def from_dib_header(
        cls, dib_header: "BmpDibHeader"
    ) -> Optional["BmpVersion"]:
        """
        Classifies a DIB header by its size. Returns None for sizes that do
        not correspond to a known BMP version.
        """
        size = dib_header.header_size
        if size == _BITMAPCOREHEADER_SIZE:
            return cls.TWO
        if size == _BITMAPINFOHEADER_SIZE:
            if dib_header.compress_type == 3:
                return cls.THREE_NT
            return cls.THREE
        if size == _BITMAPV4HEADER_SIZE:
            return cls.FOUR
        if size == _BITMAPV5HEADER_SIZE:
            return cls.FIVE
        return None


class CompressionType(Enum):
    UNCOMPRESSED = "Uncompressed"
    RLE8 = "RLE 8-bit"
    RLE4 = "RLE 4-bit"
    # Only defined for BMP version 4 and later
    BITFIELDS = "Bitfields Encoding"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: int) -> "CompressionType":
        if code == 1:
            return cls.RLE8
        if code == 2:
            return cls.RLE4
        if code == 3:
            return cls.BITFIELDS
        return cls.UNCOMPRESSED


def row_size(bits_per_pixel: int, width: int) -> int:
    """Bytes per stored row, including padding to a 4-byte boundary."""
    return (bits_per_pixel * width + 31) // 32 * 4


def file_size(bits_per_pixel: int, width: int, height: int) -> Tuple[int, int]:
    """
    Returns (header size, pixel array size) of an uncompressed file without
    a palette.
    """
    head_size = BMP_HEADER_SIZE + _BITMAPINFOHEADER_SIZE
    return head_size, height * row_size(bits_per_pixel, width)


@dataclass
class BmpHeader:
    file_size: int
    creator1: int
    creator2: int
    pixel_offset: int

    @classmethod
    def new(cls, header_size: int, data_size: int) -> "BmpHeader":
        return cls(
            file_size=header_size + data_size,
            creator1=0,
            creator2=0,
            pixel_offset=header_size,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "BmpHeader":
        return cls(*struct.unpack(FILE_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        return b"BM" + struct.pack(FILE_HEADER_FORMAT, *astuple(self))


@dataclass
class BmpDibHeader:
    header_size: int
    width: int
    height: int
    num_planes: int
    bits_per_pixel: int
    compress_type: int
    data_size: int
    hres: int
    vres: int
    num_colors: int
    num_imp_colors: int

    @classmethod
    def new(cls, width: int, height: int) -> "BmpDibHeader":
        """Synthesizes the header of an uncompressed 24-bit image."""
        _, pixel_array_size = file_size(TRUECOLOR_BPP, width, height)
        return cls(
            header_size=_BITMAPINFOHEADER_SIZE,
            width=width,
            height=height,
            num_planes=1,
            bits_per_pixel=TRUECOLOR_BPP,
            compress_type=0,
            data_size=pixel_array_size,
            hres=DEFAULT_RESOLUTION,
            vres=DEFAULT_RESOLUTION,
            num_colors=0,
            num_imp_colors=0,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "BmpDibHeader":
        return cls(*struct.unpack(DIB_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        return struct.pack(DIB_HEADER_FORMAT, *astuple(self))

    @property
    def version(self) -> Optional[BmpVersion]:
        return BmpVersion.from_dib_header(self)

    @property
    def compression(self) -> CompressionType:
        return CompressionType.from_code(self.compress_type)

    @property
    def palette_offset(self) -> int:
        return BMP_HEADER_SIZE + self.header_size
