"""Hex rendering of addresses, words and the .mif header."""
from __future__ import annotations

from .protocol import (
    ADDRESS_RADIX,
    DATA_RADIX,
    HEADER_FMT,
    RECORD_END,
    RECORD_SEP,
)


def address_digits(depth: int) -> int:
    """Number of hex digits needed to print every address in [0, depth)."""
    return len(format(max(depth - 1, 0), "x"))


def format_address(value: int, digits: int) -> str:
    """Zero-pad ``value`` in lowercase hex to at least ``digits`` digits."""
    return format(value, f"0{digits}x")


def format_word_bytes(word: bytes | bytearray | memoryview) -> str:
    """Render a word last byte first, two lowercase hex digits per byte.

    The final input byte is printed as the most significant one, whatever
    order the word was stored in.
    """
    return bytes(reversed(word)).hex()


def format_record(address: int, digits: int, word: bytes | bytearray | memoryview) -> str:
    return format_address(address, digits) + RECORD_SEP + format_word_bytes(word) + RECORD_END


def format_header(depth: int, width: int) -> str:
    return HEADER_FMT.format(
        depth=depth,
        width=width,
        address_radix=ADDRESS_RADIX,
        data_radix=DATA_RADIX,
    )
