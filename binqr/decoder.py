"""QR image -> text -> raw bytes."""
from __future__ import annotations

import logging
import os
from typing import Callable, Sequence

import cv2
import numpy as np
from pyzbar import pyzbar
from pyzbar.pyzbar import ZBarSymbol
from pyzbar.pyzbar_error import PyZbarError

from binqr import transcoder
from binqr.errors import DecodeFailure, IOFailure, NoSymbolFound, UnsupportedFormat

logger = logging.getLogger(__name__)

# Same call shape as pyzbar.decode: (image, symbols=...) -> decoded objects with `.data`
Detector = Callable[..., Sequence]


def load_image(path: str | os.PathLike) -> np.ndarray:
    """Reads an image file as a BGR buffer."""
    img = cv2.imread(os.fspath(path), cv2.IMREAD_COLOR)
    if img is None:
        raise IOFailure(f"Could not load image '{path}'")
    return img


def to_luminance(image: np.ndarray) -> np.ndarray:
    """Single-channel brightness view expected by the detector."""
    if image.dtype != np.uint8:
        raise UnsupportedFormat(f"Unsupported pixel type: {image.dtype}")
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise UnsupportedFormat(f"Unsupported pixel layout: shape {image.shape}")


def read_text(image: np.ndarray, detector: Detector = pyzbar.decode) -> str:
    """Returns the text of the first QR code found in `image`."""
    gray = to_luminance(image)
    try:
        decoded_objects = detector(gray, symbols=[ZBarSymbol.QRCODE])
    except PyZbarError as exc:
        raise DecodeFailure(f"QR decoder failed: {exc}") from exc

    if not decoded_objects:
        raise NoSymbolFound("Could not find a readable QR code in the image")

    data = decoded_objects[0].data
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeFailure("QR code content is not text") from exc

    logger.debug("Read %d characters from QR code", len(text))
    return text


def decode_image(image: np.ndarray, detector: Detector = pyzbar.decode) -> bytes:
    """Reads the QR code and base64-decodes its text back into the original bytes."""
    return transcoder.decode(read_text(image, detector))
