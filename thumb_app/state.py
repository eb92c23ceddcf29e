"""thumb_app/state.py
Per-session parameters, resolved once and passed down explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import config


@dataclass(frozen=True)
class SessionConfig:
    width: int
    height: int
    crop: bool = False

    @classmethod
    def resolve(
        cls,
        width: Optional[int] = None,
        height: Optional[int] = None,
        crop: bool = False,
    ) -> "SessionConfig":
        """Fill in defaults: width -> DEFAULT_WIDTH, height -> width.

        Zero is accepted here and rejected later by the transform, negative
        values are a usage error.
        """
        w = config.DEFAULT_WIDTH if width is None else width
        h = w if height is None else height
        if w < 0:
            raise ValueError(f"width must not be negative, got {w}")
        if h < 0:
            raise ValueError(f"height must not be negative, got {h}")
        return cls(width=w, height=h, crop=bool(crop))
