from .errors import (
    BindError,
    EncodingError,
    OversizeError,
    ParseError,
    ReadError,
    ReadTimeoutError,
    SessionError,
    SessionTimeoutError,
    ShortReadError,
    TransformError,
    WriteError,
    WriteTimeoutError,
)
from .filesystem import make_thumbnail_file
from .relay import Transform, relay
from .server import open_listener, parse_address, run_session, serve_session
from .thumbnailer import Thumbnailer, generate_thumbnail
from .transport import receive_length, recv_exact, send_all

__all__ = [
    "BindError",
    "EncodingError",
    "OversizeError",
    "ParseError",
    "ReadError",
    "ReadTimeoutError",
    "SessionError",
    "SessionTimeoutError",
    "ShortReadError",
    "TransformError",
    "WriteError",
    "WriteTimeoutError",
    "Transform",
    "Thumbnailer",
    "generate_thumbnail",
    "make_thumbnail_file",
    "open_listener",
    "parse_address",
    "receive_length",
    "recv_exact",
    "relay",
    "run_session",
    "send_all",
    "serve_session",
]
