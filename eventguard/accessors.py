"""
Read-only traversal of the relations policies depend on.

Required relations (an event's creator once persisted, a participation's
or team registration's event) raise MissingRelationError when absent.
The reward owner is optional and comes back as None.
"""

from __future__ import annotations

import logging
from typing import Any

from eventguard.entities import Event, Participation, Reward, TeamRegistration, User
from eventguard.exceptions import MissingRelationError

logger = logging.getLogger(__name__)


def same_principal(a: Any, b: Any) -> bool:
    """
    Check whether two principals are the same account.

    Persisted users compare by id, transient ones by object identity.
    None never matches anything, None included.
    """
    if a is None or b is None:
        return False
    if a is b:
        return True
    if not isinstance(a, User) or not isinstance(b, User):
        return False
    return a.is_same(b)


def _missing(resource: Any, relation: str) -> MissingRelationError:
    error = MissingRelationError(
        resource_type=type(resource).__name__,
        relation=relation,
        resource_id=getattr(resource, "id", None),
    )
    logger.error(f"Data integrity fault: {error.message}")
    return error


def event_creator(event: Event) -> User | None:
    """
    Creator of an event.

    A transient event (not yet persisted) may have no creator yet and
    yields None.
    """
    if event.creator is None and event.is_persisted:
        raise _missing(event, "creator")
    return event.creator


def event_managers(event: Event) -> list[User]:
    return [manager.user for manager in event.managers if manager.user is not None]


def is_event_creator(event: Event, principal: Any) -> bool:
    return same_principal(event_creator(event), principal)


def is_event_manager(event: Event, principal: Any) -> bool:
    return any(same_principal(user, principal) for user in event_managers(event))


def administers_event(event: Event, principal: Any) -> bool:
    """True for the event's creator and for each of its managers."""
    return is_event_creator(event, principal) or is_event_manager(event, principal)


def participation_event(participation: Participation) -> Event:
    if participation.event is None:
        raise _missing(participation, "event")
    return participation.event


def team_registration_event(registration: TeamRegistration) -> Event:
    if registration.event is None:
        raise _missing(registration, "event")
    return registration.event


def reward_owner(reward: Reward) -> User | None:
    return reward.manager


def owns_reward(reward: Reward, principal: Any) -> bool:
    # An ownerless reward matches nobody
    return same_principal(reward_owner(reward), principal)
