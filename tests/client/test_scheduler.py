"""Tests for PeriodicTask — cadence, in-flight guard and cancellation."""
import asyncio
import unittest

from vowsite.client.scheduler import PeriodicTask


class TestPeriodicTask(unittest.TestCase):
    def test_runs_repeatedly_until_stopped(self):
        calls = []

        async def func():
            calls.append(1)

        async def scenario():
            task = PeriodicTask(func, interval=0.01)
            task.start()
            await asyncio.sleep(0.055)
            await task.stop()
            self.assertFalse(task.running)
            count = len(calls)
            await asyncio.sleep(0.03)
            return count

        count = asyncio.run(scenario())
        self.assertGreaterEqual(count, 3)
        self.assertEqual(len(calls), count)

    def test_overlapping_ticks_are_skipped(self):
        release = None
        active = 0
        max_active = 0

        async def slow():
            nonlocal active, max_active
            active += 1
            max_active = max(max_active, active)
            await release.wait()
            active -= 1

        async def scenario():
            nonlocal release
            release = asyncio.Event()
            task = PeriodicTask(slow, interval=0.01)
            task.start()
            await asyncio.sleep(0.06)
            self.assertTrue(task.busy)
            release.set()
            await asyncio.sleep(0)
            await task.stop()
            return task

        task = asyncio.run(scenario())
        self.assertEqual(max_active, 1)
        self.assertGreaterEqual(task.skipped, 3)

    def test_failing_tick_does_not_stop_schedule(self):
        calls = []

        async def flaky():
            calls.append(1)
            raise RuntimeError("boom")

        async def scenario():
            task = PeriodicTask(flaky, interval=0.01)
            with self.assertLogs("vowsite.client.scheduler", level="ERROR"):
                task.start()
                await asyncio.sleep(0.045)
            await task.stop()

        asyncio.run(scenario())
        self.assertGreaterEqual(len(calls), 2)

    def test_stop_cancels_in_flight_call(self):
        cancelled = False

        async def hang():
            nonlocal cancelled
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled = True
                raise

        async def scenario():
            task = PeriodicTask(hang, interval=0.01)
            task.start()
            await asyncio.sleep(0.02)
            await task.stop()

        asyncio.run(scenario())
        self.assertTrue(cancelled)

    def test_invalid_interval(self):
        async def noop():
            pass

        with self.assertRaises(ValueError):
            PeriodicTask(noop, interval=0)
