"""thumb_app/config.py
Central configuration for the thumbnail service.

Notes:
- Every tunable can be overridden with a THUMB_* environment variable.
- Timeouts of 0 mean "block forever".
"""

import os
import sys
from typing import Optional


def _seconds(value: str) -> Optional[float]:
    sec = float(value)
    return sec if sec > 0 else None


# ================= Thumbnail Defaults =================
DEFAULT_WIDTH = int(os.getenv("THUMB_DEFAULT_WIDTH", "150"))
PNG_COMPRESSION = int(os.getenv("THUMB_PNG_COMPRESSION", "3"))  # 0 (fast) .. 9 (small)

# ================= Network =================
LISTEN_BACKLOG = 1
LENGTH_CHUNK_SIZE = 32  # no base-10 size_t needs more digits
MAX_LENGTH_VALUE = sys.maxsize * 2 + 1  # platform size_t
RECV_BUFFER_SIZE = max(1, int(os.getenv("THUMB_RECV_BUFFER_SIZE", "65536")))
MAX_PAYLOAD_BYTES = int(os.getenv("THUMB_MAX_PAYLOAD_BYTES", str(64 * 1024 * 1024)))

# ================= Timeouts =================
ACCEPT_TIMEOUT_SEC = _seconds(os.getenv("THUMB_ACCEPT_TIMEOUT_SEC", "0"))
READ_TIMEOUT_SEC = _seconds(os.getenv("THUMB_READ_TIMEOUT_SEC", "30"))

# ================= Exit Codes =================
EXIT_OK = 0
EXIT_USAGE = 64    # sysexits EX_USAGE
EXIT_DATAERR = 65  # sysexits EX_DATAERR
EXIT_INTERRUPTED = 130  # 128 + SIGINT
