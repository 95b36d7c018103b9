from enum import Enum
from typing import Optional


class BmpErrorKind(Enum):
    WRONG_MAGIC_NUMBERS = "Wrong magic numbers"
    UNSUPPORTED_BITS_PER_PIXEL = "Unsupported bits per pixel"
    UNSUPPORTED_COMPRESSION_TYPE = "Unsupported compression type"
    UNSUPPORTED_BMP_VERSION = "Unsupported bmp version"
    UNSUPPORTED_HEADER = "Unsupported header"
    BMP_IO_ERROR = "BMP Error"

    @property
    def label(self) -> str:
        return self.value


class BmpError(Exception):
    """
    Raised when a BMP stream cannot be decoded.

    Attributes:
        kind: The BmpErrorKind describing the failure.
        details: Observed-vs-expected context for the failure.
        cause: For BMP_IO_ERROR, the underlying read error.
    """

    def __init__(
        self,
        kind: BmpErrorKind,
        details: str,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(kind, details)
        self.kind = kind
        self.details = details
        self.cause = cause

    @classmethod
    def io_error(cls, cause: BaseException) -> "BmpError":
        return cls(BmpErrorKind.BMP_IO_ERROR, "Io Error", cause)

    def __str__(self) -> str:
        if self.kind is BmpErrorKind.BMP_IO_ERROR and self.cause is not None:
            return str(self.cause)
        return f"{self.kind.label}:{self.details}"
