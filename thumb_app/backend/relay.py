"""thumb_app/backend/relay.py
Payload relay for connection B: read image -> transform -> write thumbnail.

This module does NOT:
- accept or close connections
- know anything about pixels (the transform is passed in)
"""

from __future__ import annotations

import socket
from typing import Callable, Optional

from .errors import TransformError
from .transport import check_length, recv_exact, send_all

# (image bytes, width, height, crop) -> encoded thumbnail bytes
Transform = Callable[[bytes, int, int, bool], bytes]


def relay(
    conn: socket.socket,
    length: int,
    width: int,
    height: int,
    crop: bool,
    transform: Transform,
    *,
    max_bytes: Optional[int] = None,
) -> int:
    """Run the second half of a session on `conn`.

    Returns the number of thumbnail bytes written. On any failure nothing
    is written back; the caller closes the connection.
    """
    check_length(length, max_bytes)

    image_data = recv_exact(conn, length)
    print(f"[Relay] Received {len(image_data)} image bytes.")

    try:
        thumbnail_data = transform(bytes(image_data), width, height, crop)
    except TransformError as e:
        raise TransformError(f"failed to generate thumbnail: {e}") from e
    except Exception as e:
        raise TransformError(f"failed to generate thumbnail: {e!r}") from e

    send_all(conn, thumbnail_data)
    print(f"[Relay] Sent {len(thumbnail_data)} thumbnail bytes.")
    return len(thumbnail_data)
