"""
Tests for detached background work.
"""

import asyncio

import pytest

from core import BackgroundTaskRunner


@pytest.fixture
def runner():
    return BackgroundTaskRunner()


async def test_failure_stops_at_task_boundary(runner):
    async def boom():
        raise RuntimeError("extraction failed")

    task = runner.spawn(boom(), name="boom")
    await task

    assert task.exception() is None
    assert runner.pending == 0


async def test_drain_waits_for_everything(runner):
    done = []

    async def work(i):
        await asyncio.sleep(0.01 * i)
        done.append(i)

    for i in range(3):
        runner.spawn(work(i), name=f"work:{i}")

    assert runner.pending == 3
    await runner.drain()

    assert sorted(done) == [0, 1, 2]
    assert runner.pending == 0


async def test_drain_picks_up_work_spawned_while_draining(runner):
    done = []

    async def child():
        done.append("child")

    async def parent():
        runner.spawn(child(), name="child")
        done.append("parent")

    runner.spawn(parent(), name="parent")
    await runner.drain()

    assert done == ["parent", "child"]


async def test_cancel_all(runner):
    gate = asyncio.Event()

    async def blocked():
        await gate.wait()

    task = runner.spawn(blocked(), name="blocked")
    await asyncio.sleep(0)
    runner.cancel_all()
    await asyncio.gather(task, return_exceptions=True)

    assert task.done()
    assert runner.pending == 0


async def test_drain_after_cancelling_unstarted_work(runner):
    async def work():
        await asyncio.sleep(1)

    coro = work()
    task = runner.spawn(coro, name="never-started")
    runner.cancel_all()

    await runner.drain()

    assert task.cancelled()
    assert runner.pending == 0
    # Closed, so it is not reported as never awaited
    assert coro.cr_frame is None


async def test_drain_with_nothing_scheduled(runner):
    await runner.drain()

    assert runner.pending == 0
