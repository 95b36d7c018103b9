from typing import Iterator

BITS = 8


class BitIndex(Iterator[int]):
    """
    Iterates over `size` unsigned integers of `nbits` bits each, packed
    most-significant-bit first in `data`.

    Fields never straddle a byte boundary, which holds for the 1, 4 and 8
    bit depths used by indexed BMP rows. Iteration ends early if `data` is
    exhausted before `size` fields were produced, and never resumes.
    """

    def __init__(self, data: bytes, nbits: int, size: int):
        self.data = data
        self.nbits = nbits
        self.size = size
        self.bits_left = BITS - nbits
        self.mask = 0xFF >> self.bits_left
        self.index = 0

    def __iter__(self) -> "BitIndex":
        return self

    def __next__(self) -> int:
        n = self.index // BITS
        offset = self.bits_left - self.index % BITS
        self.index += self.nbits

        if self.size == 0:
            raise StopIteration
        self.size -= 1
        if n >= len(self.data):
            # Out of data; make sure later calls also stop.
            self.size = 0
            raise StopIteration
        return (self.data[n] & (self.mask << offset)) >> offset

    def __repr__(self) -> str:
        return (
            f"BitIndex(nbits={self.nbits}, remaining={self.size}, "
            f"index={self.index})"
        )


def bit_index(data: bytes, nbits: int, size: int) -> BitIndex:
    return BitIndex(data, nbits, size)
