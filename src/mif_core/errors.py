"""Error taxonomy for bin2mif.

Every failure of a conversion is terminal. Each error kind maps onto its own
process exit status so callers can tell them apart.
"""
from __future__ import annotations

from enum import IntEnum


class ExitStatus(IntEnum):
    BAD_NUMBER_FORMAT = 1
    NUMERIC_OVERFLOW = 2
    INVALID_ARGUMENTS = 3
    OPEN_FAILURE = 4
    CLOSE_FAILURE = 5
    GENERATION_FAILURE = 6
    EARLY_STOP = 7
    DEPTH_REQUIRED = 8
    INTERRUPTED = 130


class MifWarning(UserWarning):
    """Non-fatal condition noticed during a conversion."""


class MifError(Exception):
    status = ExitStatus.GENERATION_FAILURE


class BadNumberFormat(MifError):
    status = ExitStatus.BAD_NUMBER_FORMAT

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"bad number format: {text!r}")


class NumericOverflow(MifError):
    status = ExitStatus.NUMERIC_OVERFLOW

    def __init__(self, text: str, low: int, high: int):
        self.text = text
        self.low = low
        self.high = high
        super().__init__(f"integer {text} out of range [{low}, {high}]")


class InvalidArguments(MifError):
    status = ExitStatus.INVALID_ARGUMENTS


class OpenFailure(MifError):
    status = ExitStatus.OPEN_FAILURE

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to open {path}: {reason}")


class CloseFailure(MifError):
    status = ExitStatus.CLOSE_FAILURE

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to close {path}: {reason}")


class ReadFailure(MifError):
    status = ExitStatus.GENERATION_FAILURE

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"reading binary words from input: {reason}")


class WriteFailure(MifError):
    status = ExitStatus.GENERATION_FAILURE

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"writing record to output: {reason}")


class EarlyStop(MifError):
    status = ExitStatus.EARLY_STOP

    def __init__(self, requested: int, produced: int):
        self.requested = requested
        self.produced = produced
        super().__init__(
            f"{requested} words were requested, but only {produced} could be generated"
        )


class DepthRequired(MifError):
    status = ExitStatus.DEPTH_REQUIRED

    def __init__(self):
        super().__init__("input size cannot be determined; pass --depth explicitly")
