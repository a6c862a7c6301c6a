"""Client for the APRS-IS network: login, sending and receiving lines."""

from __future__ import annotations

import logging
import select
import socket
import time

_log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class AprsIsError(Exception):
    """Base class for APRS-IS failures."""


class AprsIsConnectionError(AprsIsError):
    """The server could not be reached or dropped the connection during login."""


class AprsIsPasscodeError(AprsIsError):
    """The server did not verify the user with the given passcode."""


class AprsIsClient:
    """A line-oriented TCP connection to an APRS-IS server."""

    def __init__(self, user: str, passcode: str, tool_name: str, version: str) -> None:
        self.user = user
        self.passcode = passcode
        self.tool_name = tool_name
        self.version = version
        self.timeout = DEFAULT_TIMEOUT
        self._sock: socket.socket | None = None
        self._buffer = bytearray()

    def __enter__(self) -> "AprsIsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def login_line(self, filter: str | None = None) -> str:
        """The login command sent after connecting."""
        line = f"user {self.user} pass {self.passcode} vers {self.tool_name} {self.version}"
        if filter is not None:
            line += f" filter {filter}"
        return line + "\n\r"

    def connect(self, server: str, port: int, filter: str | None = None) -> None:
        """Connect and log in; raise if the server is unreachable or refuses the passcode."""
        self.close()
        try:
            self._sock = socket.create_connection((server, port), timeout=self.timeout)
        except OSError as exc:
            raise AprsIsConnectionError(f"cannot connect to {server}:{port}: {exc}") from exc
        self._buffer.clear()
        self.send_message(self.login_line(filter))

        deadline = time.monotonic() + self.timeout
        while True:
            if self._sock is None and not self._buffer:
                raise AprsIsConnectionError("connection closed before login response")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self.close()
                raise AprsIsConnectionError("no login response from server")
            line = self._read_line(remaining)
            if "logresp" in line:
                if "unverified" in line:
                    raise AprsIsPasscodeError(f"user {self.user} not verified")
                return

    def connected(self) -> bool:
        if self._sock is not None:
            self._fill(0)
        return self._sock is not None

    def send_message(self, message: str) -> bool:
        """Send one line; False if there is no connection."""
        if not self.connected():
            return False
        try:
            self._sock.sendall((message + "\r\n").encode("utf-8"))
        except OSError:
            self._drop()
            return False
        return True

    def available(self) -> int:
        """Number of received bytes waiting to be read."""
        if self._sock is not None:
            self._fill(0)
        return len(self._buffer)

    def get_message(self) -> str:
        """The next received line, or an empty string if nothing is waiting."""
        if self.available() > 0:
            return self._read_line(self.timeout)
        return ""

    def get_aprs_line(self) -> str | None:
        """The next received packet line; None for nothing waiting or server comments."""
        line = self.get_message()
        if not line or line.startswith("#"):
            return None
        return line

    def close(self) -> None:
        self._drop()
        self._buffer.clear()

    def _drop(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def _fill(self, timeout: float) -> bool:
        if self._sock is None:
            return False
        try:
            ready, _, _ = select.select([self._sock], [], [], timeout)
        except (OSError, ValueError):
            self._drop()
            return False
        if not ready:
            return False
        try:
            chunk = self._sock.recv(4096)
        except (BlockingIOError, socket.timeout):
            return False
        except OSError:
            self._drop()
            return False
        if not chunk:
            self._drop()
            return False
        self._buffer += chunk
        return True

    def _read_line(self, timeout: float) -> str:
        deadline = time.monotonic() + timeout
        while b"\n" not in self._buffer:
            remaining = deadline - time.monotonic()
            if remaining <= 0 or self._sock is None:
                break
            self._fill(remaining)
        line, _, rest = bytes(self._buffer).partition(b"\n")
        self._buffer = bytearray(rest)
        return line.decode("utf-8", errors="replace").rstrip("\r")