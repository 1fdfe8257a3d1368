"""
Command line front end for seam carving.

Run:
    seam-carve photo.jpg --width 400 --height 300 -o carved.png
    seam-carve photo.jpg --preview          # prompts for the size

Any dimension not given as a flag is asked for interactively.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .carving import carve_to_size
from .image_io import ImageDecodeError, load_image, save_image
from .visualize import FrameRecorder, SeamPreview, combine_sinks

DEFAULT_OUTPUT = 'output.png'
DEFAULT_PREVIEW_DELAY = 0.1
DEFAULT_GIF_FPS = 10


def parse_dimension(text: str) -> int:
    """Parse a target dimension; must be a positive integer."""
    try:
        value = int(str(text).strip())
    except ValueError:
        raise ValueError(f"Not an integer: {text!r}")
    if value < 1:
        raise ValueError(f"Dimension must be positive, got {value}")
    return value


def _dimension_arg(text: str) -> int:
    try:
        return parse_dimension(text)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(str(ex))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seam-carve',
        description="Content-aware image shrinking by seam carving"
    )
    parser.add_argument(
        'input',
        type=str,
        help='Path of the image to carve'
    )
    parser.add_argument(
        '--width',
        type=_dimension_arg,
        help='Target width in pixels (prompted for if omitted)'
    )
    parser.add_argument(
        '--height',
        type=_dimension_arg,
        help='Target height in pixels (prompted for if omitted)'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        default=DEFAULT_OUTPUT,
        help=f'Output image path (default: {DEFAULT_OUTPUT})'
    )
    parser.add_argument(
        '--preview',
        action='store_true',
        help='Show each seam in a window while carving'
    )
    parser.add_argument(
        '--delay',
        type=float,
        default=DEFAULT_PREVIEW_DELAY,
        help=f'Seconds to show each preview frame (default: {DEFAULT_PREVIEW_DELAY})'
    )
    parser.add_argument(
        '--gif',
        type=str,
        help='Also write an animation of the removed seams to this path'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_GIF_FPS,
        help=f'Frames per second for --gif (default: {DEFAULT_GIF_FPS})'
    )
    parser.add_argument(
        '--log-level',
        choices=['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'],
        default='WARNING',
        help='Logging verbosity (default: WARNING)'
    )
    return parser


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _prompt_dimension(label: str) -> int:
    return parse_dimension(input(f"{label}: "))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        buffer = load_image(args.input)
    except ImageDecodeError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    print(f"Current image dimensions are: {buffer.width}x{buffer.height}")

    try:
        if args.width is None or args.height is None:
            print("Please specify the new dimensions,")
        width = args.width if args.width is not None else _prompt_dimension("Width")
        height = args.height if args.height is not None else _prompt_dimension("Height")
    except ValueError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    print(f"New Dimensions: {width}x{height}")
    print("Processing... Please Wait...")

    preview = SeamPreview(delay=args.delay) if args.preview else None
    recorder = FrameRecorder() if args.gif else None

    sink = combine_sinks(preview, recorder) if (preview or recorder) else None
    state = carve_to_size(buffer, height, width, sink=sink)
    save_image(buffer, args.output)
    print(f"Saved: {args.output} ({buffer.width}x{buffer.height}, "
          f"{state.total_removed} seams removed)")

    if recorder is not None:
        recorder.add_frame(buffer.to_numpy())
        recorder.save_gif(args.gif, fps=args.fps,
                          size=(state.original_width, state.original_height))
        print(f"Saved: {args.gif} ({len(recorder.frames)} frames)")

    if preview is not None:
        preview.show_final(buffer.to_numpy())

    return 0


if __name__ == '__main__':
    sys.exit(main())
