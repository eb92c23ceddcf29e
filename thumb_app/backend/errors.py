"""thumb_app/backend/errors.py
Error kinds for one thumbnail session.

Every error is terminal for its session. They unwind to thumb_app.main,
which prints them and picks the exit status.
"""


class SessionError(Exception):
    pass


class BindError(SessionError):
    pass


class ReadError(SessionError):
    pass


class ShortReadError(ReadError):
    """The peer closed before the announced number of bytes arrived."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"connection closed after {received} of {expected} bytes"
        )
        self.expected = expected
        self.received = received


class EncodingError(SessionError):
    pass


class ParseError(SessionError):
    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class OversizeError(SessionError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"announced image size {length} exceeds the limit of {limit} bytes"
        )
        self.length = length
        self.limit = limit


class TransformError(SessionError):
    pass


class WriteError(SessionError):
    pass


class SessionTimeoutError(SessionError):
    pass


class ReadTimeoutError(SessionTimeoutError, ReadError):
    pass


class WriteTimeoutError(SessionTimeoutError, WriteError):
    pass
