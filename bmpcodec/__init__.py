# flake8: noqa:F401
from .core.pixel import Pixel
from .core.image import Image, ImageIndex
from .bmp.bitindex import BitIndex, bit_index
from .bmp.errors import BmpError, BmpErrorKind
from .fileio import decode, encode, from_reader, open, save, to_writer
from . import consts

__all__ = [
    "BitIndex",
    "BmpError",
    "BmpErrorKind",
    "Image",
    "ImageIndex",
    "Pixel",
    "bit_index",
    "consts",
    "decode",
    "encode",
    "from_reader",
    "open",
    "save",
    "to_writer",
]
