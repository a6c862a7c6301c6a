"""Task that keeps the APRS-IS connection up and forwards queued packets."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any

from .aprsis import AprsIsClient, AprsIsConnectionError, AprsIsPasscodeError
from .tasks import System, Task, TaskDisplayState

_log = logging.getLogger(__name__)

TASK_NAME = "AprsIsTask"


class AprsIsTask(Task):
    """Connects to APRS-IS while the network is up and sends one queued packet per round.

    Items in ``outbox`` are strings, or objects whose ``encode()`` returns
    the packet as a string.
    """

    def __init__(
        self,
        system: System,
        outbox: "queue.Queue[Any]",
        client: AprsIsClient,
        server: str,
        port: int,
        poll_interval: float = 1.0,
    ) -> None:
        super().__init__(TASK_NAME, TASK_NAME)
        self.system = system
        self.outbox = outbox
        self.client = client
        self.server = server
        self.port = port
        self.poll_interval = poll_interval
        self._stop_event = threading.Event()

    def worker(self) -> None:
        while not self._stop_event.is_set():
            self.step()
            self._stop_event.wait(self.poll_interval)

    def step(self) -> None:
        """Run one round: reconnect if needed, read a line, send a queued packet."""
        if not self.system.is_wifi_or_eth_connected():
            return
        if not self.client.connected():
            if not self.connect():
                self.state_info = "not connected"
                self.state = TaskDisplayState.ERROR
                return
            self.state_info = "connected"
            self.state = TaskDisplayState.OKAY

        self.client.get_aprs_line()

        try:
            message = self.outbox.get_nowait()
        except queue.Empty:
            return
        text = message if isinstance(message, str) else message.encode()
        self.client.send_message(text + "\n")

    def connect(self) -> bool:
        """Log in to the configured server; False on failure."""
        _log.info("connecting to APRS-IS server: %s on port: %d", self.server, self.port)
        try:
            self.client.connect(self.server, self.port)
        except AprsIsConnectionError:
            _log.error("Something went wrong on connecting! Is the server reachable?")
            _log.error("Connection failed.")
            return False
        except AprsIsPasscodeError:
            _log.error("User can not be verified with passcode!")
            _log.error("Connection failed.")
            return False
        _log.info("Connected to APRS-IS server!")
        return True

    def stop(self) -> None:
        """Ask the worker to finish after its current round."""
        self._stop_event.set()