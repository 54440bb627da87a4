from __future__ import annotations

from typing import BinaryIO

from mif_core.errors import ReadFailure
from mif_core.protocol import BUFFER_CAPACITY


def read_aligned(source: BinaryIO, dest: bytearray, word_size: int, carry: bytes) -> tuple[int, bytes]:
    """Fill ``dest`` with whole words, splicing in the carry from the last call.

    ``dest`` must hold a whole number of words. The carry bytes go first,
    then a single read fills the rest. Returns the count of complete words at
    the front of ``dest`` and the trailing bytes that did not make up a word.
    On ReadFailure the caller's carry is untouched.
    """
    nbytes = len(dest)
    head = len(carry)
    dest[:head] = carry

    try:
        chunk = source.read(nbytes - head)
    except OSError as e:
        raise ReadFailure(e.strerror or str(e)) from e

    available = head + len(chunk)
    dest[head:available] = chunk

    words_read = available // word_size
    return words_read, bytes(dest[words_read * word_size:available])


class WordAlignedReader:
    """Re-segments a byte stream into fixed-size words.

    Owns the word buffer and the carry. A read may return any byte count;
    bytes that do not complete a word wait in the carry for the next fill.
    """

    def __init__(self, source: BinaryIO, word_size: int, capacity: int = BUFFER_CAPACITY):
        if word_size <= 0 or capacity <= 0:
            raise ValueError(f"word_size and capacity must be positive, got {word_size}, {capacity}")
        self.source = source
        self.word_size = word_size
        self.capacity = capacity
        self.buffer = bytearray(capacity * word_size)
        self.carry = b""
        self.words_available = 0
        # Set once a read returned no bytes at all.
        self.exhausted = False

    def fill(self) -> int:
        prev_carry = len(self.carry)
        words, carry = read_aligned(self.source, self.buffer, self.word_size, self.carry)

        self.exhausted = words * self.word_size + len(carry) == prev_carry
        self.carry = carry
        self.words_available = words
        return words

    @property
    def at_eof(self) -> bool:
        """No complete word is buffered and none can be completed."""
        return self.words_available == 0 and (not self.carry or self.exhausted)

    def word(self, index: int) -> bytearray:
        if not 0 <= index < self.words_available:
            raise IndexError(f"word {index} not in buffer of {self.words_available}")
        start = index * self.word_size
        return self.buffer[start:start + self.word_size]
