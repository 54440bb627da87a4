"""bin2mif - .mif generator.

Streams words out of a binary input and writes one record per address.
Partial output is never rolled back: a failed run leaves whatever was
already written in the sink.
"""
from __future__ import annotations

from typing import BinaryIO
from warnings import warn

from mif_core.errors import MifWarning, WriteFailure
from mif_core.hexfmt import address_digits, format_header, format_record
from mif_core.protocol import BUFFER_CAPACITY, FOOTER

from mif_compile.streams import WordAlignedReader


def _write(sink: BinaryIO, text: str) -> None:
    try:
        sink.write(text.encode("ascii"))
    except OSError as e:
        raise WriteFailure(e.strerror or str(e)) from e


def emit_records(
    source: BinaryIO,
    sink: BinaryIO,
    depth: int,
    width: int,
    capacity: int = BUFFER_CAPACITY,
) -> int:
    """Write records for addresses 0..depth-1.

    Returns the number of records written. A count below ``depth`` means the
    input ended cleanly before enough words were read. I/O errors raise
    ReadFailure / WriteFailure.
    """
    word_size = width // 8
    digits = address_digits(depth)
    reader = WordAlignedReader(source, word_size, capacity)

    cursor = 0
    for addr in range(depth):
        while cursor == reader.words_available:
            reader.fill()
            cursor = 0
            if reader.at_eof:
                if reader.carry:
                    warn(
                        f"discarding {len(reader.carry)} trailing byte(s) that do not fill a {width}-bit word",
                        MifWarning,
                    )
                warn(f"unexpected EOF after {addr} of {depth} words", MifWarning)
                return addr

        _write(sink, format_record(addr, digits, reader.word(cursor)))
        cursor += 1

    return depth


def generate_mif(source: BinaryIO, sink: BinaryIO, depth: int, width: int) -> int:
    """Write a complete .mif file and return the number of words emitted."""
    _write(sink, format_header(depth, width))

    word_count = emit_records(source, sink, depth, width)

    # The footer closes the file even after an early stop.
    _write(sink, FOOTER)
    try:
        sink.flush()
    except OSError as e:
        raise WriteFailure(e.strerror or str(e)) from e

    return word_count
