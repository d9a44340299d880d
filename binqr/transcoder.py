from __future__ import annotations

import base64
import re

from binqr.errors import MalformedEncoding

# Whole quads, with "=" padding allowed only in the final one
_BASE64_TEXT = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")


def encode(data: bytes) -> str:
    """Encode raw bytes to a base64 string (standard alphabet, padded)."""
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """Decode a base64 string back into raw bytes.

    Raises MalformedEncoding on characters outside the alphabet, non-ASCII
    input or a bad length/padding.
    """
    # b64decode(validate=True) still accepts surplus "=" after a complete quad
    if not _BASE64_TEXT.fullmatch(text):
        raise MalformedEncoding(f"Payload of {len(text)} characters is not valid base64")
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as exc:
        raise MalformedEncoding(f"Payload is not valid base64: {exc}") from exc
