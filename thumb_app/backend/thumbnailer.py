"""
thumb_app/backend/thumbnailer.py
OpenCV based thumbnail generation (decode -> resize/crop -> PNG encode).

This module does NOT:
- manage sockets
- touch the filesystem
"""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np

from .. import config
from .errors import TransformError


class Thumbnailer:
    """
    Thumbnailer turns encoded image bytes into an encoded PNG thumbnail of
    exactly width x height pixels.

    crop=True  -> centre-crop to the box aspect, then scale to the box
    crop=False -> scale to fit inside the box, pad with transparent pixels
    """

    def __init__(self, png_compression: int = config.PNG_COMPRESSION) -> None:
        self._encode_params = [int(cv2.IMWRITE_PNG_COMPRESSION), int(png_compression)]

    def generate_thumbnail(self, data: bytes, width: int, height: int, crop: bool) -> bytes:
        if width <= 0 or height <= 0:
            raise TransformError(f"thumbnail size must be positive, got {width}x{height}")
        if len(data) == 0:
            raise TransformError("image data is empty")

        src = self._decode(data)
        try:
            if crop:
                thumb = self._cover_and_crop(src, width, height)
            else:
                thumb = self._fit_and_pad(src, width, height)
            ok, enc = cv2.imencode(".png", thumb, self._encode_params)
        except cv2.error as e:
            raise TransformError(f"opencv failed: {e}") from e
        if not ok:
            raise TransformError("failed to encode thumbnail as png")
        return enc.tobytes()

    def _decode(self, data: bytes) -> np.ndarray:
        arr = np.frombuffer(data, dtype=np.uint8)
        try:
            img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
        except cv2.error as e:
            raise TransformError(f"failed to decode image data: {e}") from e
        if img is None or img.size == 0:
            raise TransformError("failed to decode image data")

        if img.dtype == np.uint16:
            img = (img >> 8).astype(np.uint8)
        elif img.dtype != np.uint8:
            raise TransformError(f"unsupported sample type: {img.dtype}")

        # ---- Normalize to BGRA ----
        if img.ndim == 2:
            return cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
        channels = img.shape[2]
        if channels == 1:
            return cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
        if channels == 3:
            return cv2.cvtColor(img, cv2.COLOR_BGR2BGRA)
        if channels == 4:
            return img
        raise TransformError(f"unsupported channel count: {channels}")

    @staticmethod
    def _resize(img: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
        h, w = img.shape[:2]
        shrinking = size[0] * size[1] < w * h
        interp = cv2.INTER_AREA if shrinking else cv2.INTER_CUBIC
        return cv2.resize(img, size, interpolation=interp)

    def _cover_and_crop(self, img: np.ndarray, width: int, height: int) -> np.ndarray:
        # crop the source to the target aspect first, so the only resize is
        # straight to (width, height)
        h, w = img.shape[:2]
        if w * height > h * width:
            crop_w = min(w, max(1, round(h * width / height)))
            x0 = (w - crop_w) // 2
            img = img[:, x0:x0 + crop_w]
        else:
            crop_h = min(h, max(1, round(w * height / width)))
            y0 = (h - crop_h) // 2
            img = img[y0:y0 + crop_h]
        return self._resize(img, (width, height))

    def _fit_and_pad(self, img: np.ndarray, width: int, height: int) -> np.ndarray:
        h, w = img.shape[:2]
        scale = min(width / w, height / h)
        new_w = min(width, max(1, round(w * scale)))
        new_h = min(height, max(1, round(h * scale)))
        resized = self._resize(img, (new_w, new_h))

        top = (height - new_h) // 2
        left = (width - new_w) // 2
        return cv2.copyMakeBorder(
            resized,
            top,
            height - new_h - top,
            left,
            width - new_w - left,
            cv2.BORDER_CONSTANT,
            value=(0, 0, 0, 0),
        )


_default = Thumbnailer()


def generate_thumbnail(data: bytes, width: int, height: int, crop: bool) -> bytes:
    """Default transform used by the service."""
    return _default.generate_thumbnail(data, width, height, crop)
