import threading

import pytest

from aprsgate.tasks import System, Task, TaskDisplayState, TaskManager


class _CountingTask(Task):
    def __init__(self, name="counter", task_id=1, display_on_screen=True):
        super().__init__(name, task_id, display_on_screen)
        self.runs = 0
        self.ran = threading.Event()

    def worker(self):
        self.runs += 1
        self.ran.set()


def test_new_task_is_booting_and_okay():
    manager = TaskManager()
    manager.add_task(_CountingTask())
    (task,) = manager.tasks()
    assert task.state is TaskDisplayState.OKAY
    assert task.state_info == "Booting"
    assert task.started is False


def test_task_keeps_identity():
    manager = TaskManager()
    manager.add_task(_CountingTask("beacon", 7, False))
    (task,) = manager.tasks()
    assert (task.name, task.task_id, task.display_on_screen) == ("beacon", 7, False)


def test_start_runs_worker_once():
    manager = TaskManager()
    manager.add_task(_CountingTask())
    (task,) = manager.tasks()
    assert task.start() is True
    assert task.ran.wait(5)
    assert task.join(5) is True
    assert task.runs == 1


def test_second_start_is_refused():
    manager = TaskManager()
    manager.add_task(_CountingTask())
    (task,) = manager.tasks()
    assert task.start() is True
    assert task.start() is False
    task.join(5)
    assert task.runs == 1


def test_join_unstarted_task():
    manager = TaskManager()
    manager.add_task(_CountingTask())
    (task,) = manager.tasks()
    assert task.join(0) is True
    assert task.runs == 0


def test_task_is_abstract():
    with pytest.raises(TypeError):
        Task("x", 1)


def test_task_manager_keeps_order():
    manager = TaskManager()
    first, second = _CountingTask("a", 1), _CountingTask("b", 2)
    manager.add_task(first)
    manager.add_task(second)
    assert manager.tasks() == [first, second]


def test_task_manager_returns_copy():
    manager = TaskManager()
    manager.add_task(_CountingTask())
    listed = manager.tasks()
    listed.clear()
    assert len(manager.tasks()) == 1


@pytest.mark.parametrize(
    "eth, wifi, expected",
    [(False, False, False), (True, False, True), (False, True, True), (True, True, True)],
)
def test_system_connectivity(eth, wifi, expected):
    system = System()
    system.eth_connected = eth
    system.wifi_connected = wifi
    assert system.is_wifi_or_eth_connected() is expected


def test_system_defaults():
    system = System()
    assert system.is_wifi_or_eth_connected() is False
    assert system.board_config is None
    assert system.user_config is None
    assert system.task_manager.tasks() == []