"""thumb_app/backend/transport.py
Socket helpers for the two-connection thumbnail protocol.

Protocol:
- connection A: decimal ASCII length of the image, optionally whitespace/newline terminated
- connection B: exactly that many raw image bytes in, thumbnail bytes out (no framing)
"""

from __future__ import annotations

import re
import socket
from typing import Optional

from .. import config
from .errors import (
    EncodingError,
    OversizeError,
    ParseError,
    ReadError,
    ReadTimeoutError,
    ShortReadError,
    WriteError,
    WriteTimeoutError,
)

_DECIMAL = re.compile(r"\+?[0-9]+")


def parse_length(text: str) -> int:
    number_str = text.strip()
    if not _DECIMAL.fullmatch(number_str):
        raise ParseError(
            f"failed to parse data as number `{number_str}` as usize", number_str
        )
    number = int(number_str)
    if number > config.MAX_LENGTH_VALUE:
        raise ParseError(
            f"failed to parse data as number `{number_str}` as usize (too large)",
            number_str,
        )
    return number


def receive_length(sock: socket.socket) -> int:
    """Read the announced image size from connection A.

    Exactly one recv() call: the sender writes the whole number at once.
    The socket is left open for the caller to close.
    """
    try:
        data = sock.recv(config.LENGTH_CHUNK_SIZE)
    except socket.timeout as e:
        raise ReadTimeoutError("timed out reading image size from stream") from e
    except OSError as e:
        raise ReadError(f"failed to read image size from stream: {e!r}") from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"image size is not valid text: {data!r}") from e

    return parse_length(text)


def check_length(length: int, limit: Optional[int]) -> None:
    if limit is not None and length > limit:
        raise OversizeError(length, limit)


def recv_exact(sock: socket.socket, n_bytes: int) -> bytearray:
    """Fill a buffer of exactly n_bytes, looping over short reads.

    Raises ShortReadError if the peer closes first. A zero-length request
    returns immediately without touching the socket.
    """
    buf = bytearray(n_bytes)
    view = memoryview(buf)
    got = 0
    while got < n_bytes:
        want = min(n_bytes - got, max(1, config.RECV_BUFFER_SIZE))
        try:
            n = sock.recv_into(view[got:got + want], want)
        except socket.timeout as e:
            raise ReadTimeoutError(
                f"timed out reading image data after {got} of {n_bytes} bytes"
            ) from e
        except OSError as e:
            raise ReadError(f"failed to read image data from stream: {e!r}") from e
        if n == 0:
            raise ShortReadError(n_bytes, got)
        got += n
    return buf


def send_all(sock: socket.socket, data: bytes) -> None:
    """Write every byte of data, then flush the stream."""
    try:
        with sock.makefile("wb") as out:
            out.write(data)
            out.flush()
    except socket.timeout as e:
        raise WriteTimeoutError("timed out writing thumbnail to tcp stream") from e
    except OSError as e:
        raise WriteError(f"failed to flush data written to tcp stream: {e!r}") from e
