from __future__ import annotations

import pytest
from fakes import PREFIX, FakeBus, FakeEndpoints, player_name

from mpris_session.config.settings import BusSettings, SessionSettings, Settings
from mpris_session.domain.players.value_objects import PlaybackStatus

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def bus() -> FakeBus:
    return FakeBus()


@pytest.fixture
def endpoints() -> FakeEndpoints:
    return FakeEndpoints()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        bus=BusSettings(name_prefix=PREFIX, timeout_s=2.5),
        session=SessionSettings(strict_enumeration=False),
    )


@pytest.fixture
def seed_players(bus, endpoints):
    """Put players on the bus before the manager starts, in the given order."""

    def _seed(*players: tuple[str, PlaybackStatus]) -> list[str]:
        names = []
        for short_name, status in players:
            name = player_name(short_name)
            endpoints.prepare(name, status)
            bus.names.append(name)
            names.append(name)
        return names

    return _seed


@pytest.fixture
def make_manager(bus, endpoints, settings):
    from mpris_session.application.services.session_manager import SessionManager

    managers: list[SessionManager] = []

    def _make(**overrides) -> SessionManager:
        manager = SessionManager(bus, endpoints, settings=overrides.get("settings", settings))
        managers.append(manager)
        return manager

    yield _make

    for manager in managers:
        manager.close()
