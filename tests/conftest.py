import pytest

from fakes import FakeSurface, Recorder, TimerRecorder


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def recorder():
    return Recorder()
