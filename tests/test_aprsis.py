import socket
import threading
import time

import pytest

from aprsgate.aprsis import (
    AprsIsClient,
    AprsIsConnectionError,
    AprsIsError,
    AprsIsPasscodeError,
)


class _Server:
    def __init__(self, replies, close_after_reply=False):
        self.sock = socket.create_server(("127.0.0.1", 0))
        self.port = self.sock.getsockname()[1]
        self.replies = replies
        self.close_after_reply = close_after_reply
        self.received = bytearray()
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        conn, _ = self.sock.accept()
        with conn:
            conn.settimeout(5)
            try:
                while b"\n\r" not in self.received:
                    chunk = conn.recv(4096)
                    if not chunk:
                        return
                    self.received += chunk
                conn.sendall(self.replies)
                if self.close_after_reply:
                    return
                while True:
                    chunk = conn.recv(4096)
                    if not chunk:
                        break
                    self.received += chunk
            except OSError:
                pass

    def wait_for(self, data):
        deadline = time.monotonic() + 5
        while data not in self.received and time.monotonic() < deadline:
            time.sleep(0.01)
        return data in self.received

    def close(self):
        self.sock.close()
        self.thread.join(5)


def _client():
    client = AprsIsClient("N0CALL", "-1", "aprsgate", "0.2")
    client.timeout = 2.0
    return client


def _wait_available(client):
    deadline = time.monotonic() + 5
    while client.available() == 0 and time.monotonic() < deadline:
        time.sleep(0.01)


def _closed_port():
    probe = socket.create_server(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


VERIFIED = b"# aprsc 2.1\r\n# logresp N0CALL verified, server T2TEST\r\n"


def test_login_line_without_filter():
    assert _client().login_line() == "user N0CALL pass -1 vers aprsgate 0.2\n\r"


def test_login_line_with_filter():
    assert _client().login_line("r/1/2/3") == "user N0CALL pass -1 vers aprsgate 0.2 filter r/1/2/3\n\r"


def test_errors_share_base():
    client = AprsIsClient("N0CALL", "-1", "aprsgate", "0.2")
    client.timeout = 2.0
    with pytest.raises(AprsIsError) as info:
        client.connect("127.0.0.1", _closed_port())
    assert isinstance(info.value, AprsIsConnectionError)
    assert issubclass(AprsIsPasscodeError, AprsIsError)


def test_connect_sends_login_and_succeeds():
    server = _Server(VERIFIED)
    client = _client()
    try:
        client.connect("127.0.0.1", server.port)
        assert client.connected() is True
        assert server.received.startswith(client.login_line().encode())
    finally:
        client.close()
        server.close()
    assert client.connected() is False


def test_connect_unverified_raises():
    server = _Server(b"# logresp N0CALL unverified, server T2TEST\r\n")
    client = _client()
    try:
        with pytest.raises(AprsIsPasscodeError):
            client.connect("127.0.0.1", server.port)
    finally:
        client.close()
        server.close()


def test_connect_refused_raises():
    with pytest.raises(AprsIsConnectionError):
        _client().connect("127.0.0.1", _closed_port())


def test_server_closing_before_logresp_raises():
    server = _Server(b"# aprsc 2.1\r\n", close_after_reply=True)
    client = _client()
    try:
        with pytest.raises(AprsIsConnectionError):
            client.connect("127.0.0.1", server.port)
    finally:
        client.close()
        server.close()


def test_send_message_without_connection():
    assert _client().send_message("N0CALL>APRS:>hi") is False


def test_send_message_appends_line_end():
    server = _Server(VERIFIED)
    client = _client()
    try:
        client.connect("127.0.0.1", server.port)
        assert client.send_message("N0CALL>APRS:>hi") is True
        assert server.wait_for(b"N0CALL>APRS:>hi\r\n")
    finally:
        client.close()
        server.close()


def test_get_message_empty_when_nothing_waiting():
    client = _client()
    assert client.get_message() == ""
    assert client.get_aprs_line() is None


def test_get_aprs_line_skips_comments():
    server = _Server(VERIFIED + b"# keepalive\r\nN0CALL>APRS:>hello\r\n")
    client = _client()
    try:
        client.connect("127.0.0.1", server.port)
        _wait_available(client)
        lines = []
        deadline = time.monotonic() + 5
        while len(lines) < 2 and time.monotonic() < deadline:
            if client.available():
                lines.append(client.get_aprs_line())
            else:
                time.sleep(0.01)
        assert lines == [None, "N0CALL>APRS:>hello"]
        assert client.available() == 0
    finally:
        client.close()
        server.close()


def test_context_manager_closes():
    server = _Server(VERIFIED)
    try:
        with _client() as client:
            client.connect("127.0.0.1", server.port)
            assert client.connected() is True
        assert client.connected() is False
    finally:
        server.close()