"""Test doubles shared across the suite"""

import asyncio
from datetime import datetime, timedelta, timezone

from pear_store.core.errors import ProviderError
from pear_store.models.order import OrderStatus
from pear_store.services.message_provider import MessageProvider


class FakeClock:
    """Clock that moves forward by a fixed step on every reading"""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


class FixedRandom:
    """Random source replaying a fixed list of values"""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


class RecordingSleep:
    """Sleep stand-in that records delays and returns at once"""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)
        await asyncio.sleep(0)


class GatedSleep:
    """Returns at once for the first ``open_calls`` calls, then blocks forever"""

    def __init__(self, open_calls=1):
        self.open_calls = open_calls
        self.delays = []
        self._gate = asyncio.Event()

    async def __call__(self, delay):
        self.delays.append(delay)
        if len(self.delays) > self.open_calls:
            await self._gate.wait()
        await asyncio.sleep(0)


class ScriptedProvider(MessageProvider):
    """Provider returning '<status> message', failing for chosen statuses"""

    def __init__(self, fail_on=(), blank_on=()):
        self.fail_on = set(fail_on)
        self.blank_on = set(blank_on)
        self.calls = []

    async def status_message(self, status: OrderStatus) -> str:
        self.calls.append(status)
        if status in self.fail_on:
            raise ProviderError(f"provider down for {status.value}")
        if status in self.blank_on:
            return "   "
        return f"{status.value} message"

    async def product_description(self, name: str) -> str:
        return f"{name} description"


class SlowProvider(ScriptedProvider):
    """Provider that hangs on chosen statuses"""

    def __init__(self, slow_on=()):
        super().__init__()
        self.slow_on = set(slow_on)

    async def status_message(self, status: OrderStatus) -> str:
        if status in self.slow_on:
            await asyncio.sleep(10)
        return await super().status_message(status)


async def wait_until(predicate, attempts=200):
    """Yield to the loop until ``predicate()`` holds"""
    for _ in range(attempts):
        if predicate():
            return True
        await asyncio.sleep(0)
    return predicate()
