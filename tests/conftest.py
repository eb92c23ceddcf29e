"""
Pytest fixtures for the thumbnail service tests
"""

import socket
from concurrent.futures import ThreadPoolExecutor

import pytest

from thumb_app.backend import open_listener

from .helpers import TransformSpy, encode_png


@pytest.fixture
def sock_pair():
    a, b = socket.socketpair()
    a.settimeout(5.0)
    b.settimeout(5.0)
    try:
        yield a, b
    finally:
        a.close()
        b.close()


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    try:
        yield pool
    finally:
        pool.shutdown(wait=False)


@pytest.fixture
def listener():
    server_sock = open_listener("127.0.0.1:0")
    try:
        yield server_sock
    finally:
        server_sock.close()


@pytest.fixture
def listener_address(listener):
    host, port = listener.getsockname()[:2]
    return f"{host}:{port}"


@pytest.fixture
def spy():
    return TransformSpy()


@pytest.fixture
def png_bytes():
    return encode_png(200, 100)
