"""Background tasks, their registry, and the shared system state."""

from __future__ import annotations

import abc
import enum
import threading
from typing import Any, Hashable


class TaskDisplayState(enum.Enum):
    """Health of a task as shown on the status screen."""

    ERROR = "error"
    WARNING = "warning"
    OKAY = "okay"


class Task(abc.ABC):
    """A named worker that runs in its own thread once started."""

    def __init__(self, name: str, task_id: Hashable, display_on_screen: bool = True) -> None:
        self.name = name
        self.task_id = task_id
        self.display_on_screen = display_on_screen
        self.state = TaskDisplayState.OKAY
        self.state_info = "Booting"
        self._thread: threading.Thread | None = None

    @abc.abstractmethod
    def worker(self) -> None:
        """The body of the task; runs in the task's thread."""

    @property
    def started(self) -> bool:
        return self._thread is not None

    def start(self) -> bool:
        """Start the worker thread; False if the task was already started."""
        if self._thread is not None:
            return False
        self._thread = threading.Thread(target=self.worker, name=self.name, daemon=True)
        self._thread.start()
        return True

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker to finish; True if it is no longer running."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()


class TaskManager:
    """Keeps the tasks of the program in the order they were added."""

    def __init__(self) -> None:
        self._tasks: list[Task] = []

    def add_task(self, task: Task) -> None:
        self._tasks.append(task)

    def tasks(self) -> list[Task]:
        """A copy of the registered tasks."""
        return list(self._tasks)


class System:
    """State shared between the tasks: configuration and network status."""

    def __init__(self) -> None:
        self.board_config: Any = None
        self.user_config: Any = None
        self.task_manager = TaskManager()
        self.eth_connected = False
        self.wifi_connected = False
        self.packet_logger: Any = None

    def is_wifi_or_eth_connected(self) -> bool:
        return self.eth_connected or self.wifi_connected