"""
Pytest fixtures for eventguard tests.

Provides the principals and resource graphs used across test modules.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from eventguard import EventGuard, GuardConfig, reset_default_guard
from eventguard.entities import (
    Event,
    Game,
    Participation,
    RegistrationStatus,
    Reward,
    Team,
    TeamRegistration,
    TeamSponsor,
    User,
    Visibility,
)
from eventguard.policies.registry import PolicyRegistry, reset_global_registry


@pytest.fixture(autouse=True)
def _fresh_globals() -> Generator[None, None, None]:
    """Keep the global registry and default guard isolated per test."""
    reset_global_registry()
    reset_default_guard()
    yield
    reset_global_registry()
    reset_default_guard()


# ============================================================================
# Principal Fixtures
# ============================================================================


@pytest.fixture
def admin() -> User:
    """An administrator who created nothing."""
    return User(id=1, email="admin@example.com", roles=["ROLE_ADMIN"])


@pytest.fixture
def organiser() -> User:
    """The organiser who creates the sample event."""
    return User(id=2, email="organiser@example.com", roles=["ROLE_ORGANISER"])


@pytest.fixture
def other_organiser() -> User:
    """An organiser unrelated to the sample event."""
    return User(id=3, email="rival@example.com", roles=["ROLE_ORGANISER"])


@pytest.fixture
def manager_user() -> User:
    """A plain user managing the sample event."""
    return User(id=4, email="manager@example.com", roles=["ROLE_USER"])


@pytest.fixture
def basic_user() -> User:
    """A plain user with no relation to anything."""
    return User(id=5, email="player@example.com")


# ============================================================================
# Resource Fixtures
# ============================================================================


@pytest.fixture
def event(organiser: User, manager_user: User) -> Event:
    """A persisted event created by `organiser` and managed by `manager_user`."""
    event = Event(id=10, name="Spring cup", creator=organiser)
    event.add_manager(manager_user)
    return event


@pytest.fixture
def participation(event: Event) -> Participation:
    return event.add_participation(
        Participation(id=20, game=Game(id=30, name="Chess"), round=1)
    )


@pytest.fixture
def team_registration(event: Event) -> TeamRegistration:
    return event.add_team_registration(
        TeamRegistration(
            id=40,
            team=Team(id=50, name="Knights"),
            registration_status=RegistrationStatus.ACCEPTED,
        )
    )


@pytest.fixture
def reward(basic_user: User) -> Reward:
    """A reward managed by `basic_user`."""
    return Reward(id=60, name="Trophy", manager=basic_user)


@pytest.fixture
def ownerless_reward() -> Reward:
    return Reward(id=61, name="Medal", manager=None)


@pytest.fixture
def sponsor() -> TeamSponsor:
    return TeamSponsor(id=70, name="Acme")


@pytest.fixture
def private_event(organiser: User) -> Event:
    return Event(
        id=11,
        name="Invitational",
        creator=organiser,
        participants_visibility=Visibility.PRIVATE,
    )


# ============================================================================
# Guard Fixtures
# ============================================================================


@pytest.fixture
def policy_registry() -> PolicyRegistry:
    """An empty registry."""
    return PolicyRegistry()


@pytest.fixture
def guard() -> EventGuard:
    """A guard on its own registry, preloaded with the builtin policies."""
    return EventGuard(registry=PolicyRegistry.with_defaults())


@pytest.fixture
def quiet_guard() -> EventGuard:
    return EventGuard(
        registry=PolicyRegistry.with_defaults(),
        config=GuardConfig(log_denials=False),
    )
