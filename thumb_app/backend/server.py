"""thumb_app/backend/server.py
Single-session TCP server: bind, accept connection A (length), accept
connection B (payload relay), then tear everything down.
"""

from __future__ import annotations

import socket
from typing import Optional, Tuple

from .. import config
from ..state import SessionConfig
from .errors import BindError, ReadError, ReadTimeoutError
from .relay import Transform, relay
from .transport import check_length, receive_length


def parse_address(address: str) -> Tuple[str, int]:
    """'host:port' or '[v6]:port' -> (host, port)."""
    host, sep, port_str = address.strip().rpartition(":")
    if not sep or not host:
        raise BindError(f"failed to bind to address: {address}: expected HOST:PORT")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_str)
    except ValueError:
        raise BindError(f"failed to bind to address: {address}: bad port `{port_str}`") from None
    if not 0 <= port <= 65535:
        raise BindError(f"failed to bind to address: {address}: port out of range")
    return host, port


def open_listener(address: str) -> socket.socket:
    host, port = parse_address(address)
    try:
        family, socktype, proto, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_STREAM
        )[0]
    except socket.gaierror as e:
        raise BindError(f"failed to bind to address: {address}: {e}") from e

    server_sock = socket.socket(family, socktype, proto)
    server_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        server_sock.bind(sockaddr)
        server_sock.listen(config.LISTEN_BACKLOG)
    except OSError as e:
        server_sock.close()
        raise BindError(f"failed to bind to address: {address}: {e!r}") from e
    return server_sock


def _accept(server_sock: socket.socket, which: str) -> socket.socket:
    try:
        conn, addr = server_sock.accept()
    except socket.timeout as e:
        raise ReadTimeoutError(f"timed out waiting for {which} connection") from e
    except OSError as e:
        raise ReadError(f"{which} connection to client failed: {e!r}") from e
    print(f"[Server] {which.capitalize()} connection from: {addr}")
    return conn


def run_session(
    server_sock: socket.socket,
    session: SessionConfig,
    transform: Transform,
    *,
    max_payload: Optional[int] = config.MAX_PAYLOAD_BYTES,
    accept_timeout: Optional[float] = config.ACCEPT_TIMEOUT_SEC,
    read_timeout: Optional[float] = config.READ_TIMEOUT_SEC,
) -> int:
    """Serve exactly one session on an already-bound listener.

    Returns the number of thumbnail bytes sent. The listener itself is left
    open; both accepted connections are closed before returning.
    """
    server_sock.settimeout(accept_timeout)

    conn = _accept(server_sock, "first")
    try:
        conn.settimeout(read_timeout)
        length = receive_length(conn)
    finally:
        conn.close()
    print(f"[Server] Announced image size: {length} bytes")
    check_length(length, max_payload)

    conn = _accept(server_sock, "second")
    try:
        conn.settimeout(read_timeout)
        return relay(
            conn,
            length,
            session.width,
            session.height,
            session.crop,
            transform,
            max_bytes=max_payload,
        )
    finally:
        conn.close()


def serve_session(
    address: str,
    session: SessionConfig,
    transform: Transform,
    **kwargs,
) -> int:
    """Bind `address`, serve one session, close the listener."""
    server_sock = open_listener(address)
    print(f"[Server] Waiting for client on {address}...")
    try:
        return run_session(server_sock, session, transform, **kwargs)
    finally:
        server_sock.close()
