"""
Team registration policy.

Any authenticated user can register a team. Reviewing, changing and
withdrawing a registration belongs to admins and to whoever administers
the event (its creator or managers). Listing all of an event's
registrations is admin-only; other callers get the public view from
`Event.public_team_registrations()`.
"""

from __future__ import annotations

import logging
from typing import Any

from eventguard.accessors import team_registration_event
from eventguard.entities import Event, TeamRegistration
from eventguard.policies.base import PolicyWithScope, Scope
from eventguard.policies.builtin import EventScopedPolicy
from eventguard.roles import Role

logger = logging.getLogger(__name__)


class TeamRegistrationPolicy(EventScopedPolicy, PolicyWithScope[TeamRegistration]):
    CREATE = "TEAM_REGISTRATION_CREATE"
    READ = "TEAM_REGISTRATION_READ"
    UPDATE = "TEAM_REGISTRATION_UPDATE"
    DELETE = "TEAM_REGISTRATION_DELETE"

    action_prefix = "TEAM_REGISTRATION"

    resource: TeamRegistration

    def parent_event(self) -> Event:
        return team_registration_event(self.resource)

    def can_create(self, context: dict[str, Any]) -> bool:
        return True

    def can_read(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.ADMIN) or self.administers_parent_event()

    def can_update(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.ADMIN) or self.administers_parent_event()

    def can_delete(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.ADMIN) or self.administers_parent_event()

    class Scope(Scope[TeamRegistration]):
        """The full /events/{id}/teams listing, admins only."""

        def resolve(self) -> list[TeamRegistration]:
            has_at_least = getattr(self.user, "has_at_least", None)
            if has_at_least and has_at_least(Role.ADMIN):
                return list(self.scope)
            logger.debug("Team registration listing withheld from non-admin")
            return []
