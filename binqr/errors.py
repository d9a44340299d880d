"""Failure kinds for the QR round trip and the result type returned to callers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class BinqrError(Exception):
    """Base class for every failure the pipelines report."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedEncoding(BinqrError):
    kind = "malformed_encoding"


class PayloadTooLarge(BinqrError):
    kind = "payload_too_large"


class EncodeFailure(BinqrError):
    kind = "encode_failure"


class NoSymbolFound(BinqrError):
    kind = "no_symbol_found"


class DecodeFailure(BinqrError):
    kind = "decode_failure"


class IOFailure(BinqrError):
    kind = "io_failure"


class UnsupportedFormat(BinqrError):
    kind = "unsupported_format"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one user-triggered operation: a value or the error that stopped it."""
    value: Optional[T] = None
    error: Optional[BinqrError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BinqrError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Returns the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
