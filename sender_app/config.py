"""sender_app/config.py
Client configuration.
"""

import os

# Network (thumbnail server)
SERVER_ADDRESS = os.getenv("THUMB_SERVER_ADDRESS", "localhost:12345")
CONNECT_TIMEOUT_SEC = float(os.getenv("THUMB_CONNECT_TIMEOUT_SEC", "5.0"))
READ_TIMEOUT_SEC = float(os.getenv("THUMB_CLIENT_READ_TIMEOUT_SEC", "60.0"))
RECV_BUFFER_SIZE = 65536
