"""Command-line entry point for pixarray.

Decodes an image into a flat RGB or packed pixel array stored as a NumPy
``.npy`` file, or encodes such an array back into an image.

Usage example:
    python -m pixarray.main decode -i input.png -o pixels.npy --layout packed
    python -m pixarray.main encode -i pixels.npy -o output.png --width 640 --layout packed
"""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

import numpy as np

from .converter import PixelBufferConverter
from .errors import PixelArrayError


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pixarray",
        description="Convert images to flat RGB or packed 24-bit pixel arrays and back.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    dec = sub.add_parser("decode", help="Image -> .npy pixel array")
    dec.add_argument("-i", "--input", required=True, help="Path to input image file")
    dec.add_argument("-o", "--output", required=True, help="Path to output .npy file")

    enc = sub.add_parser("encode", help=".npy pixel array -> image")
    enc.add_argument("-i", "--input", required=True, help="Path to input .npy file")
    enc.add_argument(
        "-o",
        "--output",
        required=True,
        help="Path to output image file; the format is taken from the extension",
    )
    enc.add_argument("--width", type=int, required=True, help="Image width in pixels (>=1)")

    for p in (dec, enc):
        p.add_argument(
            "--layout",
            type=str,
            default="flat",
            choices=["flat", "packed"],
            help="flat: [R,G,B,R,G,B,...] bytes | packed: one (R<<16)|(G<<8)|B int per pixel",
        )

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs."""
    if ns.command == "encode" and ns.width < 1:
        raise ValueError("--width must be an integer >= 1")
    if not Path(ns.input).exists():
        raise ValueError(f"Input file not found: {ns.input}")


async def _run(args: argparse.Namespace) -> str:
    converter = PixelBufferConverter()
    packed = args.layout == "packed"

    if args.command == "decode":
        if packed:
            arr = await converter.decode_to_packed_pixels(args.input)
        else:
            arr = await converter.decode_to_flat_rgb(args.input)
        np.save(args.output, arr)
        return f"Wrote {arr.size} {args.layout} values to {args.output}"

    arr = np.load(args.input)
    if packed:
        await converter.encode_from_packed_pixels(arr, args.width, args.output)
    else:
        await converter.encode_from_flat_rgb(arr, args.width, args.output)
    return f"Wrote image to {args.output}"


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Returns
    -------
    int
        Exit status code: 0 on success, 1 on a conversion error, 2 on bad arguments.
    """
    args = parse_args(argv)
    try:
        validate_args(args)
    except ValueError as e:
        print(f"Argument error: {e}")
        return 2

    try:
        message = asyncio.run(_run(args))
    except PixelArrayError as e:
        print(f"Conversion failed: {e}")
        return 1

    print(message)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
