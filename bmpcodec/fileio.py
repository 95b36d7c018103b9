import logging
from pathlib import Path
from typing import BinaryIO, Union
from .bmp.decoder import decode_image
from .bmp.encoder import encode_image
from .bmp.errors import BmpError
from .core.image import Image

logger = logging.getLogger(__name__)


def decode(data: bytes) -> Image:
    return decode_image(data)


def encode(image: Image) -> bytes:
    return encode_image(image)


def open(path: Union[str, Path]) -> Image:
    """
    Reads and decodes the BMP file at `path`.

    Raises:
        BmpError: if the file cannot be read or is not a supported BMP.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise BmpError.io_error(e) from e
    logger.debug("Read %d bytes from %s", len(data), path)
    return decode_image(data)


def from_reader(source: BinaryIO) -> Image:
    """Reads a binary stream to its end and decodes it."""
    try:
        data = source.read()
    except OSError as e:
        raise BmpError.io_error(e) from e
    return decode_image(data)


def save(image: Image, path: Union[str, Path]):
    image.save(path)


def to_writer(image: Image, destination: BinaryIO):
    image.to_writer(destination)
