import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from geecache.singleflight import Batch


def test_call_returns_result():
    batch = Batch()
    assert batch.call("Tom", lambda: "630") == "630"


def test_call_propagates_exception():
    batch = Batch()

    def fail():
        raise KeyError("unknown")

    with pytest.raises(KeyError):
        batch.call("unknown", fail)


def test_sequential_calls_run_again():
    batch = Batch()
    counter = []

    def fn():
        counter.append(1)
        return len(counter)

    assert batch.call("k", fn) == 1
    assert batch.call("k", fn) == 2


def test_concurrent_calls_share_one_execution():
    batch = Batch()
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow():
        calls.append(1)
        started.set()
        release.wait(5)
        return "589"

    with ThreadPoolExecutor(max_workers=5) as pool:
        leader = pool.submit(batch.call, "Jack", slow)
        assert started.wait(5)
        followers = [pool.submit(batch.call, "Jack", slow) for _ in range(4)]
        time.sleep(0.2)
        release.set()
        results = [future.result(timeout=5) for future in [leader, *followers]]

    assert results == ["589"] * 5
    assert len(calls) == 1


def test_different_keys_run_independently():
    batch = Batch()
    assert batch.call("a", lambda: 1) == 1
    assert batch.call("b", lambda: 2) == 2


def test_close_rejects_calls():
    batch = Batch()
    batch.close()
    with pytest.raises(RuntimeError):
        batch.call("Sam", lambda: "567")


def test_context_manager_closes():
    with Batch() as batch:
        assert batch.call("Sam", lambda: "567") == "567"
    with pytest.raises(RuntimeError):
        batch.call("Sam", lambda: "567")