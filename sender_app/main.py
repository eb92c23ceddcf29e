"""sender_app/main.py
Send an image file to a running thumbnail server and save the reply.

    python -m sender_app.main photo.png -a localhost:12345 -o thumb.png
"""

import argparse
import sys
from pathlib import Path

from . import config
from .sender import send_image


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="sender_app")
    ap.add_argument("image", type=Path, help="image file to send")
    ap.add_argument("-a", "--address", default=config.SERVER_ADDRESS,
                    help=f"server ADDR:PORT (default {config.SERVER_ADDRESS})")
    ap.add_argument("-o", "--output", type=Path, required=True,
                    help="where to write the thumbnail")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        data = args.image.read_bytes()
        thumb = send_image(args.address, data)
    except (OSError, ValueError) as e:
        print(f"[Sender] Error: {e}", file=sys.stderr)
        return 1

    if not thumb:
        print("[Sender] Server returned no data (see server log).", file=sys.stderr)
        return 1

    try:
        args.output.write_bytes(thumb)
    except OSError as e:
        print(f"[Sender] Error: {e}", file=sys.stderr)
        return 1
    print(f"[Sender] Saved thumbnail to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
