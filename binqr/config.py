from dataclasses import dataclass
from typing import Optional

# --- Configuration ---
# Side of the generated QR image in pixels. The symbol is scaled by a whole
# number of pixels per module and centred, so small payloads fill the square.
QR_IMAGE_SIZE = 300
# Quiet zone around the symbol, in modules. Detection needs at least one.
QR_MARGIN = 1
# Low error correction gives the most room for data.
ERROR_CORRECTION = "L"
# Only rendered barcodes are accepted on the decode path.
DECODE_IMAGE_EXTENSIONS = (".png",)
# Default suffix for files restored from a QR code (assay sheet files).
DECODED_FILE_SUFFIX = ".rfa"
# Size of the preview shown in the window.
PREVIEW_SIZE = 300
# ---------------------

ERROR_CORRECTION_LEVELS = ("L", "M", "Q", "H")
MAX_VERSION = 40


@dataclass(frozen=True)
class EncoderSettings:
    """Parameters for turning a text payload into a QR image.

    Fields:
        size: Target width and height of the image, px.
        margin: Quiet zone, in modules.
        error_correction: One of "L", "M", "Q", "H".
        version: Fixed QR version (1-40) or None to pick the smallest that fits.
    """
    size: int = QR_IMAGE_SIZE
    margin: int = QR_MARGIN
    error_correction: str = ERROR_CORRECTION
    version: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.margin < 1:
            raise ValueError(f"margin must be at least 1 module, got {self.margin}")
        if self.error_correction not in ERROR_CORRECTION_LEVELS:
            raise ValueError(
                f"error_correction must be one of {', '.join(ERROR_CORRECTION_LEVELS)}, "
                f"got {self.error_correction!r}"
            )
        if self.version is not None and not 1 <= self.version <= MAX_VERSION:
            raise ValueError(f"version must be between 1 and {MAX_VERSION}, got {self.version}")
