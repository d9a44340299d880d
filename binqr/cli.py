import argparse
import logging
import os
import sys

from binqr import operations
from binqr.config import (
    DECODED_FILE_SUFFIX,
    ERROR_CORRECTION,
    ERROR_CORRECTION_LEVELS,
    QR_IMAGE_SIZE,
    QR_MARGIN,
    EncoderSettings,
)


def build_parser():
    parser = argparse.ArgumentParser(prog="binqr", description="Turn a file into a QR code image and back.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="Render a file as a QR code PNG.")
    encode.add_argument("file", help="The path to the file you want to encode.")
    encode.add_argument("-o", "--output", help="Where to write the PNG (default: <file name>.png).")
    _add_encoder_options(encode)

    decode = subparsers.add_parser("decode", help="Restore a file from a QR code PNG.")
    decode.add_argument("image", help="The QR code PNG to read.")
    decode.add_argument("-o", "--output", help="Where to write the restored file.")
    decode.add_argument("--suffix", default=DECODED_FILE_SUFFIX,
                        help=f"Suffix of the default output name (default: {DECODED_FILE_SUFFIX}).")

    gui = subparsers.add_parser("gui", help="Open the desktop window.")
    gui.add_argument("file", nargs="?", default="", help="File to preselect.")
    _add_encoder_options(gui)

    return parser


def _add_encoder_options(parser):
    parser.add_argument("--size", type=int, default=QR_IMAGE_SIZE, help=f"Image side in pixels (default: {QR_IMAGE_SIZE}).")
    parser.add_argument("--margin", type=int, default=QR_MARGIN, help=f"Quiet zone in modules (default: {QR_MARGIN}).")
    parser.add_argument("--error-correction", choices=ERROR_CORRECTION_LEVELS, default=ERROR_CORRECTION,
                        help=f"QR error correction level (default: {ERROR_CORRECTION}).")


def _settings(parser, args):
    try:
        return EncoderSettings(size=args.size, margin=args.margin, error_correction=args.error_correction)
    except ValueError as e:
        parser.error(str(e))


def run_encode(args, settings):
    outcome = operations.generate_barcode(args.file, settings)
    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1

    barcode = outcome.value
    print(f"Source file: '{os.path.basename(args.file)}' ({barcode.payload_size} bytes)")

    output = args.output or os.path.join(os.path.dirname(args.file), operations.default_image_name(args.file))
    if os.path.abspath(output) == os.path.abspath(args.file):
        print(f"Error: refusing to overwrite the source file '{args.file}'", file=sys.stderr)
        return 1
    saved = operations.save_barcode(barcode, output)
    if not saved.ok:
        print(f"Error: {saved.error}", file=sys.stderr)
        return 1

    print(f"Success! QR code ({barcode.image.width}x{barcode.image.height}) saved as '{saved.value}'.")
    return 0


def run_decode(args):
    output = args.output or operations.default_decoded_name(args.image, args.suffix)
    outcome = operations.decode_to_file(args.image, output)
    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1

    print(f"Success! File restored as '{outcome.value}'.")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "encode":
        return run_encode(args, _settings(parser, args))
    if args.command == "decode":
        return run_decode(args)

    # Imported here so encode/decode work without a display
    from binqr import app
    app.run(_settings(parser, args), args.file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
