import io
import socket

import pytest

from thumb_app import config
from thumb_app.backend import (
    EncodingError,
    OversizeError,
    ParseError,
    ReadError,
    ReadTimeoutError,
    SessionTimeoutError,
    ShortReadError,
    WriteError,
    receive_length,
    recv_exact,
    send_all,
)
from thumb_app.backend.transport import check_length, parse_length


class TrickleSocket:
    """Serves a byte string a few bytes per recv_into call."""

    def __init__(self, data, step=3):
        self._src = io.BytesIO(data)
        self.step = step
        self.reads = 0

    def recv_into(self, view, nbytes):
        self.reads += 1
        chunk = self._src.read(min(nbytes, self.step))
        view[:len(chunk)] = chunk
        return len(chunk)


class BrokenSocket:
    def __init__(self, exc):
        self.exc = exc

    def recv(self, n):
        raise self.exc

    def recv_into(self, view, nbytes):
        raise self.exc

    def makefile(self, mode):
        raise self.exc


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"0", 0),
        (b"12345", 12345),
        (b"12345\n", 12345),
        (b"  \t42 \r\n", 42),
        (b"007", 7),
        (str(config.MAX_LENGTH_VALUE).encode(), config.MAX_LENGTH_VALUE),
    ],
)
def test_receive_length_parses_trimmed_decimal(sock_pair, raw, expected):
    client, server = sock_pair
    client.sendall(raw)
    assert receive_length(server) == expected


@pytest.mark.parametrize("raw", [b"", b"   \n", b"abc", b"-5", b"1.5", b"12 34", b"0x10"])
def test_receive_length_rejects_non_numbers(sock_pair, raw):
    client, server = sock_pair
    client.sendall(raw)
    client.shutdown(socket.SHUT_WR)
    with pytest.raises(ParseError) as info:
        receive_length(server)
    assert info.value.text == raw.decode().strip()
    assert f"`{info.value.text}`" in str(info.value)


def test_receive_length_rejects_overflow(sock_pair):
    client, server = sock_pair
    too_big = str(config.MAX_LENGTH_VALUE + 1)
    client.sendall(too_big.encode())
    with pytest.raises(ParseError, match=too_big):
        receive_length(server)


def test_receive_length_rejects_invalid_utf8(sock_pair):
    client, server = sock_pair
    client.sendall(b"12\xff\xfe")
    with pytest.raises(EncodingError):
        receive_length(server)


def test_receive_length_reads_once(sock_pair):
    client, server = sock_pair
    client.sendall(b"7" + b" " * (config.LENGTH_CHUNK_SIZE - 1) + b"tail")
    assert receive_length(server) == 7
    # remaining bytes are left on the socket
    assert server.recv(100) == b"tail"


def test_receive_length_wraps_socket_errors():
    with pytest.raises(ReadError, match="failed to read image size from stream"):
        receive_length(BrokenSocket(ConnectionResetError("reset by peer")))


def test_receive_length_times_out(sock_pair):
    _, server = sock_pair
    server.settimeout(0.05)
    with pytest.raises(SessionTimeoutError):
        receive_length(server)


def test_parse_length_accepts_leading_plus():
    assert parse_length(" +9 ") == 9


def test_check_length():
    check_length(10, 10)
    check_length(10 ** 12, None)
    with pytest.raises(OversizeError) as info:
        check_length(11, 10)
    assert info.value.length == 11
    assert info.value.limit == 10


def test_recv_exact_assembles_short_reads():
    payload = bytes(range(256)) * 4
    sock = TrickleSocket(payload + b"extra", step=7)
    assert bytes(recv_exact(sock, len(payload))) == payload
    assert sock.reads > 1


def test_recv_exact_zero_length_does_not_read():
    sock = TrickleSocket(b"data")
    assert recv_exact(sock, 0) == bytearray()
    assert sock.reads == 0


def test_recv_exact_short_read():
    with pytest.raises(ShortReadError) as info:
        recv_exact(TrickleSocket(b"abcde"), 10)
    assert info.value.expected == 10
    assert info.value.received == 5


def test_recv_exact_wraps_socket_errors():
    with pytest.raises(ReadError):
        recv_exact(BrokenSocket(ConnectionResetError()), 4)


def test_recv_exact_times_out(sock_pair):
    client, server = sock_pair
    server.settimeout(0.05)
    client.sendall(b"ab")
    with pytest.raises(SessionTimeoutError, match="2 of 4"):
        recv_exact(server, 4)


def test_send_all_writes_everything(sock_pair, executor):
    client, server = sock_pair
    payload = b"x" * (1024 * 1024)
    future = executor.submit(send_all, server, payload)

    received = bytearray()
    while len(received) < len(payload):
        received.extend(client.recv(65536))
    future.result(timeout=5)
    assert bytes(received) == payload


def test_send_all_wraps_socket_errors():
    with pytest.raises(WriteError, match="failed to flush"):
        send_all(BrokenSocket(BrokenPipeError()), b"data")


class StalledSocket:
    def recv(self, n):
        raise socket.timeout("timed out")

    def recv_into(self, view, nbytes):
        raise socket.timeout("timed out")

    def makefile(self, mode):
        raise socket.timeout("timed out")


def test_read_timeouts_are_read_errors():
    with pytest.raises(ReadError):
        receive_length(StalledSocket())
    with pytest.raises(ReadTimeoutError):
        recv_exact(StalledSocket(), 4)


def test_write_timeout_is_a_write_error():
    with pytest.raises(WriteError) as info:
        send_all(StalledSocket(), b"data")
    assert isinstance(info.value, SessionTimeoutError)


def test_recv_exact_with_zero_buffer_size_still_reads(monkeypatch):
    monkeypatch.setattr(config, "RECV_BUFFER_SIZE", 0)
    assert bytes(recv_exact(TrickleSocket(b"abcdef"), 6)) == b"abcdef"
