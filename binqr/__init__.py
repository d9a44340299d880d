from binqr.config import EncoderSettings
from binqr.decoder import decode_image, load_image, read_text, to_luminance
from binqr.encoder import SymbolMatrix, build_matrix, encode_bytes, encode_text, fit_to_size, rasterize
from binqr.errors import (
    BinqrError,
    DecodeFailure,
    EncodeFailure,
    IOFailure,
    MalformedEncoding,
    NoSymbolFound,
    Outcome,
    PayloadTooLarge,
    UnsupportedFormat,
)
from binqr.operations import GeneratedBarcode, decode_to_file, generate_barcode, save_barcode
from binqr.raster import from_display_image, to_display_image

__version__ = "0.1.0"
