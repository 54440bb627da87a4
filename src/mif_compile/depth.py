from __future__ import annotations

import os
import stat
from typing import BinaryIO
from warnings import warn

from mif_core.errors import DepthRequired, MifWarning


def probe_size(source: BinaryIO) -> int | None:
    """Return the byte length of ``source``, or None for pipes and streams."""
    try:
        st = os.fstat(source.fileno())
    except (AttributeError, OSError):
        st = None

    if st is not None:
        return st.st_size if stat.S_ISREG(st.st_mode) else None

    # In-memory streams have no descriptor but can still be measured.
    seekable = getattr(source, "seekable", None)
    if seekable is None or not seekable():
        return None
    pos = source.tell()
    end = source.seek(0, os.SEEK_END)
    source.seek(pos)
    return end - pos


def resolve_depth(requested: int | None, source: BinaryIO, width: int) -> int:
    """Number of words to emit.

    An explicit request is returned as is. Otherwise the depth is derived from
    the input size, which raises DepthRequired when the size is unknowable.
    """
    size = probe_size(source)

    if requested is None or requested < 0:
        if size is None:
            raise DepthRequired()
        return size * 8 // width

    if size is not None and requested * (width // 8) > size:
        warn(
            f"depth {requested} needs {requested * (width // 8)} bytes, but input holds only {size}",
            MifWarning,
        )
    return requested
