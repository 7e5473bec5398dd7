from datetime import datetime, timedelta, timezone

import pytest

from scriptbin import STORE_KEY, create_app
from scriptbin.store import ScriptRepository


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repository(clock):
    return ScriptRepository(clock=clock)


@pytest.fixture
def app(clock):
    app = create_app("testing")
    app.extensions[STORE_KEY].clock = clock
    return app


@pytest.fixture
def store(app):
    return app.extensions[STORE_KEY]


@pytest.fixture
def client(app):
    return app.test_client()
