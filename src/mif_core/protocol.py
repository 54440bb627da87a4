"""Memory Initialization File (.mif) format constants.

Single source of truth for the text layout and the bounds of a conversion.
Keep this file stable. Writer and tests must remain synchronized.
"""

# Word buffer capacity, in words (not bytes)
BUFFER_CAPACITY = 128

ADDRESS_RADIX = "HEX"
DATA_RADIX = "HEX"

# Header: DEPTH, WIDTH, radices, then the CONTENT/BEGIN block opener
HEADER_FMT = (
    "DEPTH = {depth};\n"
    "WIDTH = {width};\n"
    "ADDRESS_RADIX = {address_radix};\n"
    "DATA_RADIX = {data_radix};\n"
    "CONTENT\n"
    "BEGIN\n"
)

# Record: <addr> : <word>;
RECORD_SEP = " : "
RECORD_END = ";\n"

FOOTER = "END;\n"

# Option bounds
DEFAULT_WIDTH = 8
MAX_WIDTH = 255            # width is an unsigned 8-bit quantity
MIN_DEPTH = -(2 ** 63)     # depth is a signed 64-bit quantity
MAX_DEPTH = 2 ** 63 - 1
