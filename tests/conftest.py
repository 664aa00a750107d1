from datetime import datetime, timedelta

import pytest

from internet_cafe import Clock, InternetCafe


class ManualClock(Clock):
    """Clock that only moves when told to"""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return ManualClock(datetime(2024, 3, 15, 9, 30, 0))


@pytest.fixture
def cafe(clock):
    return InternetCafe(5, 20.0, clock)
