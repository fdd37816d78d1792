import threading
import time

import pytest

from nothanks.errors import GameBusyError
from nothanks.gate import ActionGate


def test_gate_releases_after_success_and_failure():
    gate = ActionGate(timeout=0.1)
    with gate.hold("first"):
        assert gate.busy
    assert not gate.busy

    with pytest.raises(RuntimeError):
        with gate.hold("second"):
            raise RuntimeError("boom")
    assert not gate.busy

    with gate.hold("third"):
        pass


def test_gate_times_out_while_another_action_runs():
    gate = ActionGate(timeout=0.05)
    entered = threading.Event()
    release = threading.Event()

    def slow_action():
        with gate.hold("slow action"):
            entered.set()
            release.wait(2)

    worker = threading.Thread(target=slow_action)
    worker.start()
    try:
        assert entered.wait(2)
        started = time.monotonic()
        with pytest.raises(GameBusyError) as excinfo:
            with gate.hold("impatient action"):
                pass
        assert time.monotonic() - started < 1
        assert "still in progress" in str(excinfo.value)
        assert excinfo.value.holder == "slow action"
    finally:
        release.set()
        worker.join()

    with gate.hold("after"):
        pass


def test_gate_lease_excludes_other_processes(database_manager):
    gate = ActionGate(timeout=0.1, lease_store=database_manager, table_id="t1", lease_seconds=30)
    assert database_manager.acquire_lease("t1", "someone-else", 30)

    with pytest.raises(GameBusyError):
        with gate.hold("reveal"):
            pass
    assert not gate.busy

    database_manager.release_lease("t1", "someone-else")
    with gate.hold("reveal"):
        # Our own lease is visible to other processes while the action runs
        assert not database_manager.acquire_lease("t1", "someone-else", 30)
    assert database_manager.acquire_lease("t1", "someone-else", 30)


def test_gate_takes_over_expired_lease(database_manager):
    assert database_manager.acquire_lease("t1", "crashed-process", -1)
    gate = ActionGate(timeout=0.1, lease_store=database_manager, table_id="t1")
    with gate.hold("take"):
        pass


def test_gate_waits_for_lease_held_by_another_process(database_manager):
    gate = ActionGate(timeout=1.0, lease_store=database_manager, table_id="t1", lease_seconds=30)
    assert database_manager.acquire_lease("t1", "someone-else", 30)
    timer = threading.Timer(0.3, database_manager.release_lease, args=("t1", "someone-else"))
    timer.start()
    try:
        started = time.monotonic()
        with gate.hold("reveal"):
            waited = time.monotonic() - started
    finally:
        timer.cancel()
        timer.join()
    assert 0.2 < waited < 1.0


def test_gate_gives_up_on_lease_after_timeout(database_manager):
    gate = ActionGate(timeout=0.2, lease_store=database_manager, table_id="t1", lease_seconds=30)
    assert database_manager.acquire_lease("t1", "someone-else", 30)
    started = time.monotonic()
    with pytest.raises(GameBusyError) as excinfo:
        with gate.hold("reveal"):
            pass
    assert time.monotonic() - started >= 0.2
    assert excinfo.value.holder == "another server process"
    assert not gate.busy
