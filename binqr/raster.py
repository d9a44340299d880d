"""Conversion between OpenCV pixel buffers and PIL images.

OpenCV keeps colour images in BGR order; PIL (and Tk through ImageTk) expects
RGB. Only 8-bit gray and 8-bit 3-channel buffers are supported.
"""
from __future__ import annotations

import cv2
import numpy as np
from PIL import Image

from binqr.errors import UnsupportedFormat


def to_display_image(raster: np.ndarray) -> Image.Image:
    """Wraps a gray or BGR buffer into a PIL image ("L" or "RGB")."""
    if raster.dtype != np.uint8:
        raise UnsupportedFormat(f"Unsupported pixel type: {raster.dtype}")

    if raster.ndim == 2:
        return Image.fromarray(np.ascontiguousarray(raster))
    if raster.ndim == 3 and raster.shape[2] == 3:
        rgb = cv2.cvtColor(raster, cv2.COLOR_BGR2RGB)
        return Image.fromarray(rgb)

    raise UnsupportedFormat(f"Unsupported pixel layout: shape {raster.shape}")


def from_display_image(image: Image.Image) -> np.ndarray:
    """Returns a gray buffer for "L" images and a BGR buffer for everything else."""
    if image.mode == "L":
        return np.array(image, dtype=np.uint8)
    if image.mode != "RGB":
        image = image.convert("RGB")
    rgb = np.array(image, dtype=np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
