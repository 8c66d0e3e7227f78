"""Exceptions raised by the network and its persistence layer."""
from __future__ import annotations


class DimensionMismatch(ValueError):
    """Raised when a vector does not match the width a layer expects."""

    def __init__(self, what: str, expected: int, actual: int):
        super().__init__(f"{what} has length {actual}, expected {expected}")
        self.expected = expected
        self.actual = actual


class MalformedState(ValueError):
    """Raised when a persisted network record is corrupt or incomplete."""


class NetworkNotActivated(RuntimeError):
    """Raised when training is attempted without a matching activation."""
