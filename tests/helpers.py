"""Shared helpers for the test modules."""

import cv2
import numpy as np


def encode_png(width, height, channels=3):
    """Encode a simple gradient image of the given size as PNG bytes."""
    xs = np.linspace(0, 255, width, dtype=np.uint8)
    plane = np.tile(xs, (height, 1))
    if channels == 1:
        img = plane
    else:
        img = np.dstack([plane] * channels)
    ok, enc = cv2.imencode(".png", img)
    assert ok
    return enc.tobytes()


def decode(data):
    return cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)


class TransformSpy:
    """Records calls; returns its input unchanged unless told to fail."""

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, data, width, height, crop):
        self.calls.append((bytes(data), width, height, crop))
        if self.error is not None:
            raise self.error
        return bytes(data)


def recv_all(sock):
    out = bytearray()
    while True:
        chunk = sock.recv(65536)
        if not chunk:
            return bytes(out)
        out.extend(chunk)
