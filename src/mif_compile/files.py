"""Scoped access to the input and output of a conversion.

Named files are closed on every exit path. Standard streams are borrowed,
never closed.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import BinaryIO, Iterator
from warnings import warn

import click

from mif_core.errors import CloseFailure, MifWarning, OpenFailure

STDIO_PATH = "-"


def _close(f: BinaryIO, path: str) -> None:
    try:
        f.close()
    except OSError as e:
        raise CloseFailure(path, e.strerror or str(e)) from e


@contextmanager
def _owned(path: str, mode: str) -> Iterator[BinaryIO]:
    try:
        f = open(path, mode)
    except OSError as e:
        raise OpenFailure(path, e.strerror or str(e)) from e

    try:
        yield f
    except BaseException:
        # An earlier failure is already being reported; a close error must not replace it.
        try:
            f.close()
        except OSError as e:
            warn(f"closing file {path}: {e}", MifWarning)
        raise
    _close(f, path)


@contextmanager
def open_input(path: str = STDIO_PATH) -> Iterator[BinaryIO]:
    if path == STDIO_PATH:
        yield click.get_binary_stream("stdin")
        return
    with _owned(path, "rb") as f:
        yield f


@contextmanager
def open_output(path: str = STDIO_PATH) -> Iterator[BinaryIO]:
    if path == STDIO_PATH:
        yield click.get_binary_stream("stdout")
        return
    with _owned(path, "wb") as f:
        yield f
