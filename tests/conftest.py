from __future__ import annotations

import pytest

from subevents.config_loader import CONFIG_ENV_VAR, ConfigLoader
from subevents.bus import EventBus


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    ConfigLoader.configure(path=None)
    yield
    ConfigLoader.configure(path=None)


@pytest.fixture
def bus():
    event_bus = EventBus()
    yield event_bus
    event_bus.clear()


@pytest.fixture
def recorder():
    calls = []

    def make(label):
        def handler(payload):
            calls.append((label, payload))

        return handler

    make.calls = calls
    return make
