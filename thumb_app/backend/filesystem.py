"""thumb_app/backend/filesystem.py
Filesystem mode: read a source image, transform it, write the thumbnail.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..state import SessionConfig
from .errors import ReadError, TransformError, WriteError
from .relay import Transform

PathLike = Union[str, Path]


def make_thumbnail_file(
    image: PathLike,
    thumbnail: PathLike,
    session: SessionConfig,
    transform: Transform,
) -> int:
    """Returns the number of bytes written to `thumbnail`."""
    image = Path(image)
    thumbnail = Path(thumbnail)

    try:
        image_data = image.read_bytes()
    except OSError as e:
        raise ReadError(f"failed to read file `{image}`: {e}") from e
    print(f"[Files] Read {len(image_data)} bytes from {image}")

    try:
        thumbnail_data = transform(image_data, session.width, session.height, session.crop)
    except TransformError as e:
        raise TransformError(f"failed to generate thumbnail: {e}") from e
    except Exception as e:
        raise TransformError(f"failed to generate thumbnail: {e!r}") from e

    try:
        thumbnail.write_bytes(thumbnail_data)
    except OSError as e:
        raise WriteError(f"failed to write thumbnail to file `{thumbnail}`: {e}") from e
    print(f"[Files] Wrote {len(thumbnail_data)} bytes to {thumbnail}")
    return len(thumbnail_data)
