import random

import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from core.round_engine import RoundEngine
from core.session_manager import SessionManager, get_session_manager
from main import app


class PinnedHueRandom(random.Random):
    """random.Random whose base-hue draw (randrange(360)) always returns `hue`."""

    def __init__(self, hue):
        self.hue = hue
        super().__init__(0)

    def randrange(self, start, stop=None, step=1):
        if stop is None and start == 360:
            return self.hue
        return super().randrange(start, stop, step)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def engine(rng):
    return RoundEngine(rng=rng)


@pytest.fixture()
def test_settings():
    return Settings(random_seed=42, feedback_delay_ms=1500, max_sessions=3)


@pytest.fixture()
def manager(test_settings):
    return SessionManager(test_settings)


@pytest.fixture()
def client(manager, test_settings):
    app.dependency_overrides[get_session_manager] = lambda: manager
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def pinned_rng():
    return PinnedHueRandom
