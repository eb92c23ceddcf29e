"""sender_app/sender.py
Image bytes -> thumbnail server -> thumbnail bytes.

Connection A carries the decimal payload size, connection B carries the
payload; the reply on B is read until the server closes it.
"""

from __future__ import annotations

import socket
from typing import Tuple

from . import config


def split_address(address: str) -> Tuple[str, int]:
    host, _, port = address.strip().rpartition(":")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


def _connect(addr: Tuple[str, int], timeout: float) -> socket.socket:
    client = socket.create_connection(addr, timeout=timeout)
    client.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    return client


def send_length(addr: Tuple[str, int], length: int, timeout: float) -> None:
    client = _connect(addr, timeout)
    try:
        client.sendall(f"{length}\n".encode("ascii"))
    finally:
        client.close()


def send_image(
    address: str,
    data: bytes,
    *,
    connect_timeout: float = config.CONNECT_TIMEOUT_SEC,
    read_timeout: float = config.READ_TIMEOUT_SEC,
) -> bytes:
    """Run one session against `address` and return the thumbnail bytes.

    An empty result means the server aborted the session.
    """
    addr = split_address(address)

    print(f"[Sender] Announcing {len(data)} bytes to {address}...")
    send_length(addr, len(data), connect_timeout)

    client = _connect(addr, connect_timeout)
    try:
        client.sendall(data)
        client.shutdown(socket.SHUT_WR)
        client.settimeout(read_timeout)

        reply = bytearray()
        while True:
            chunk = client.recv(config.RECV_BUFFER_SIZE)
            if not chunk:
                break
            reply.extend(chunk)
    finally:
        client.close()

    print(f"[Sender] Received {len(reply)} thumbnail bytes.")
    return bytes(reply)
