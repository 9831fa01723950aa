"""
eventguard: authorization decisions for an event-management backend.

Each resource type (events, participations, rewards, sponsors, team
registrations, users) has a policy deciding CREATE/READ/UPDATE/DELETE
for the acting principal, from its roles and its relationship to the
resource (creator, manager, owner).

Basic Usage:
    >>> from eventguard import EventGuard, Event, User
    >>>
    >>> guard = EventGuard()
    >>> organiser = User(id=1, roles=["ROLE_ORGANISER"])
    >>> event = Event(id=10, name="Spring cup", creator=organiser)
    >>>
    >>> guard.decide("EVENT_UPDATE", event, organiser).allowed
    True
    >>>
    >>> @guard.authorize("EVENT_DELETE", resource_param="event")
    ... def delete_event(event: Event, principal: User) -> None:
    ...     repository.delete(event)
"""

__version__ = "0.1.0"

from eventguard.core import (
    EventGuard,
    GuardConfig,
    decide,
    get_current_principal,
    get_default_guard,
    reset_default_guard,
)
from eventguard.decorators import requires
from eventguard.entities import (
    Event,
    Game,
    Manager,
    Participation,
    Register,
    RegistrationStatus,
    Reward,
    Team,
    TeamRegistration,
    TeamSponsor,
    User,
    Visibility,
)
from eventguard.exceptions import (
    AuthorizationError,
    ConfigurationError,
    EventGuardError,
    MissingRelationError,
    PolicyNotFoundError,
    UnrecognizedActionError,
)
from eventguard.policies.base import Policy
from eventguard.roles import ROLE_HIERARCHY, Role, has_at_least, reachable_roles
from eventguard.types import AuthorizationResult, Verb, action_id

__all__ = [
    # Version
    "__version__",
    # Main class
    "EventGuard",
    "GuardConfig",
    "decide",
    "get_default_guard",
    "reset_default_guard",
    "get_current_principal",
    "requires",
    # Policy
    "Policy",
    # Roles
    "Role",
    "ROLE_HIERARCHY",
    "reachable_roles",
    "has_at_least",
    # Core types
    "AuthorizationResult",
    "Verb",
    "action_id",
    # Entities
    "User",
    "Event",
    "Manager",
    "Participation",
    "Reward",
    "TeamSponsor",
    "Team",
    "TeamRegistration",
    "Register",
    "Game",
    "Visibility",
    "RegistrationStatus",
    # Exceptions
    "EventGuardError",
    "AuthorizationError",
    "ConfigurationError",
    "UnrecognizedActionError",
    "PolicyNotFoundError",
    "MissingRelationError",
]
