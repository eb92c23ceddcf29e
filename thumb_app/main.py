"""thumb_app/main.py
Command-line entrypoint.

Modes:
- filesystem: --image SRC --thumbnail DST
- network:    --address HOST:PORT (serves exactly one session, then exits)
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from . import __version__, config
from .backend import SessionError, generate_thumbnail, make_thumbnail_file, serve_session
from .state import SessionConfig


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _size(name: str):
    def parse(value: str) -> int:
        v = value.strip()
        if not v.isdigit() or not v.isascii():
            raise argparse.ArgumentTypeError(f"failed to parse {name} `{value}` as usize")
        return int(v)

    return parse


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="thumb_app",
        description="Generate a thumbnail from an image file or over two TCP connections.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-i", "--image", metavar="/PATH/TO/IMAGE",
                    help="the path to the original image")
    ap.add_argument("-t", "--thumbnail", metavar="/PATH/TO/THUMBNAIL",
                    help="the path to the thumbnail image")
    ap.add_argument("-a", "--address", metavar="ADDR:PORT",
                    help="the ip address:port to read/write data (of the form 'localhost:12345')")
    ap.add_argument("-x", "--width", type=_size("width"), metavar="WIDTH",
                    help=f"the width of the thumbnail (defaults to {config.DEFAULT_WIDTH})")
    ap.add_argument("-y", "--height", type=_size("height"), metavar="HEIGHT",
                    help="the height of the thumbnail (defaults to match width)")
    ap.add_argument("-c", "--crop", action="store_true",
                    help="crop the image to exactly fill the given thumbnail dimensions")
    return ap


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)

    has_paths = args.image is not None or args.thumbnail is not None
    if has_paths and args.address is not None:
        raise UsageError("--address cannot be used with --image/--thumbnail")
    if not has_paths and args.address is None:
        raise UsageError("one of --image/--thumbnail or --address is required")
    if has_paths and (args.image is None or args.thumbnail is None):
        raise UsageError("--image and --thumbnail must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parse_args(argv)
        session = SessionConfig.resolve(args.width, args.height, args.crop)
    except (UsageError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(parser.format_usage(), end="", file=sys.stderr)
        return config.EXIT_USAGE

    print(f"[Main] Thumbnail {session.width}x{session.height} crop={session.crop}")
    try:
        if args.address is not None:
            serve_session(args.address, session, generate_thumbnail)
        else:
            make_thumbnail_file(args.image, args.thumbnail, session, generate_thumbnail)
    except SessionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return config.EXIT_DATAERR
    except KeyboardInterrupt:
        print("[Main] Interrupted.", file=sys.stderr)
        return config.EXIT_INTERRUPTED

    print("[Main] Done.")
    return config.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
