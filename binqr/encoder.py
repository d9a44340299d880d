"""Text/bytes -> QR symbol -> 8-bit gray image."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import cv2
import numpy as np
import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.util import MODE_8BIT_BYTE, QRData

from binqr import transcoder
from binqr.config import EncoderSettings
from binqr.errors import EncodeFailure, PayloadTooLarge

logger = logging.getLogger(__name__)

DARK = 0
LIGHT = 255

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


@dataclass(frozen=True, eq=False)
class SymbolMatrix:
    """Grid of QR modules, quiet zone included. `modules[y, x]` is True for dark."""
    modules: np.ndarray = field(repr=False)
    version: int

    @property
    def width(self) -> int:
        return self.modules.shape[1]

    @property
    def height(self) -> int:
        return self.modules.shape[0]

    def get(self, x: int, y: int) -> bool:
        return bool(self.modules[y, x])


def build_matrix(text: str, settings: Optional[EncoderSettings] = None) -> SymbolMatrix:
    """Encodes `text` as a QR symbol.

    The text goes into a single byte-mode segment, so the capacity is the
    published byte capacity of the version/error-correction pair.
    """
    settings = settings or EncoderSettings()
    qr = qrcode.QRCode(
        version=settings.version,
        error_correction=_ERROR_CORRECTION[settings.error_correction],
        box_size=1,
        border=settings.margin,
    )
    try:
        qr.add_data(QRData(text.encode("utf-8"), mode=MODE_8BIT_BYTE))
        qr.make(fit=settings.version is None)
    except DataOverflowError as exc:
        raise PayloadTooLarge(
            f"Payload of {len(text)} characters does not fit in a QR code "
            f"(error correction {settings.error_correction})"
        ) from exc
    except (ValueError, TypeError, IndexError) as exc:
        raise EncodeFailure(f"Failed to generate QR code: {exc}") from exc

    modules = np.array(qr.get_matrix(), dtype=bool)
    logger.debug("Built QR version %d, %dx%d modules", qr.version, modules.shape[1], modules.shape[0])
    return SymbolMatrix(modules=modules, version=qr.version)


def rasterize(matrix: SymbolMatrix) -> np.ndarray:
    """One pixel per module: 0 for dark, 255 for light."""
    return np.where(matrix.modules, DARK, LIGHT).astype(np.uint8)


def fit_to_size(raster: np.ndarray, size: int) -> np.ndarray:
    """Scales a module raster by a whole factor and centres it on a light square.

    A raster already larger than `size` keeps its native dimensions.
    """
    scale = max(1, size // max(raster.shape))
    if scale > 1:
        raster = np.repeat(np.repeat(raster, scale, axis=0), scale, axis=1)

    height, width = raster.shape
    pad_y = max(0, size - height)
    pad_x = max(0, size - width)
    if not pad_x and not pad_y:
        return raster

    top, left = pad_y // 2, pad_x // 2
    return cv2.copyMakeBorder(
        raster, top, pad_y - top, left, pad_x - left, cv2.BORDER_CONSTANT, value=LIGHT
    )


def encode_text(text: str, settings: Optional[EncoderSettings] = None) -> np.ndarray:
    settings = settings or EncoderSettings()
    matrix = build_matrix(text, settings)
    return fit_to_size(rasterize(matrix), settings.size)


def encode_bytes(data: bytes, settings: Optional[EncoderSettings] = None) -> np.ndarray:
    """Base64-encodes `data` and renders it as a QR image."""
    return encode_text(transcoder.encode(data), settings)
