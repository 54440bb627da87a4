"""bin2mif core - .mif text format and error taxonomy."""
from .hexfmt import (
    address_digits,
    format_address,
    format_header,
    format_record,
    format_word_bytes,
)

__all__ = [
    "address_digits",
    "format_address",
    "format_header",
    "format_record",
    "format_word_bytes",
]
