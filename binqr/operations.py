"""User-triggered operations: generate a QR image, save it, decode a QR image to a file.

Every function here is attempt-once and returns an `Outcome` instead of
raising, so the front-ends only have to show the result.
"""
from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image

from binqr import decoder, encoder
from binqr.config import DECODE_IMAGE_EXTENSIONS, DECODED_FILE_SUFFIX
from binqr.errors import BinqrError, IOFailure, Outcome, UnsupportedFormat
from binqr.raster import to_display_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GeneratedBarcode:
    """A QR image produced from a source file, ready to be shown or saved."""
    source_path: Path
    payload_size: int
    raster: np.ndarray = field(repr=False)
    image: Image.Image = field(repr=False)


def default_image_name(source_path):
    """File name offered when saving the QR image of `source_path`.

    A PNG source gets a `_qr` suffix so the default never points at the source.
    """
    path = Path(source_path)
    if path.suffix.lower() == ".png":
        return path.stem + "_qr.png"
    return path.stem + ".png"


def default_decoded_name(image_path, suffix=DECODED_FILE_SUFFIX):
    """Path offered for the file restored from `image_path`: same folder and stem."""
    path = Path(image_path)
    return path.with_name(path.stem + suffix)


def is_decodable_image(image_path):
    return Path(image_path).suffix.lower() in DECODE_IMAGE_EXTENSIONS


def read_source(source_path):
    try:
        with open(source_path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise IOFailure(f"Could not open file '{source_path}': {exc}") from exc


def write_output(destination, data):
    """Writes `data` next to `destination` first and moves it into place,
    so a failed write leaves no truncated file behind."""
    path = Path(destination)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as f_out:
            f_out.write(data)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise IOFailure(f"Could not write file '{path}': {exc}") from exc
    return path


def generate_barcode(source_path, settings=None):
    """Reads any file and renders its content as a QR image."""
    try:
        data = read_source(source_path)
        raster = encoder.encode_bytes(data, settings)
        image = to_display_image(raster)
    except BinqrError as exc:
        logger.warning("QR generation failed for %s: %s", source_path, exc)
        return Outcome.failure(exc)

    logger.info("Generated %dx%d QR image from %s (%d bytes)", image.width, image.height, source_path, len(data))
    return Outcome.success(
        GeneratedBarcode(source_path=Path(source_path), payload_size=len(data), raster=raster, image=image)
    )


def save_barcode(barcode, destination):
    """Writes the QR image as PNG."""
    path = Path(destination)
    try:
        barcode.image.save(path, format="PNG")
    except (OSError, ValueError) as exc:
        logger.warning("Could not save QR image to %s: %s", path, exc)
        return Outcome.failure(IOFailure(f"Could not save image '{path}': {exc}"))

    logger.info("Saved QR image to %s", path)
    return Outcome.success(path)


def decode_to_file(image_path, destination):
    """Decodes a QR PNG and writes the recovered bytes to `destination`.

    Nothing is written unless the whole decode succeeds.
    """
    if not is_decodable_image(image_path):
        return Outcome.failure(
            UnsupportedFormat(f"'{Path(image_path).name}' is not a PNG image")
        )

    try:
        image = decoder.load_image(image_path)
        data = decoder.decode_image(image)
        path = write_output(destination, data)
    except BinqrError as exc:
        logger.warning("Decoding %s failed: %s", image_path, exc)
        return Outcome.failure(exc)

    logger.info("Restored %d bytes from %s into %s", len(data), image_path, path)
    return Outcome.success(path)
