"""
Shared pytest fixtures for the code-stopper tests.
"""

import pytest


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback the way a loop would, unless cancelled"""
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    """Records armed timers instead of running them on a clock"""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled]


@pytest.fixture
def scheduler():
    """
    Fixture providing a manual scheduler for the banner auto-dismiss.

    Returns:
        FakeScheduler whose timers are fired explicitly by the test
    """
    return FakeScheduler()


@pytest.fixture
def rejections():
    """List collecting RejectedLine events from the observer callback"""
    return []
