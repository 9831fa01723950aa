"""Participation policy."""

from __future__ import annotations

from typing import Any

from eventguard.accessors import participation_event
from eventguard.entities import Event, Participation
from eventguard.policies.builtin import EventScopedPolicy
from eventguard.roles import Role


class ParticipationPolicy(EventScopedPolicy):
    """
    Participations are low-sensitivity: any authenticated user may
    create, read or delete them. Only the parent event's creator or one
    of its managers may update one.
    """

    CREATE = "PARTICIPATION_CREATE"
    READ = "PARTICIPATION_READ"
    UPDATE = "PARTICIPATION_UPDATE"
    DELETE = "PARTICIPATION_DELETE"

    action_prefix = "PARTICIPATION"

    resource: Participation

    def parent_event(self) -> Event:
        return participation_event(self.resource)

    def can_create(self, context: dict[str, Any]) -> bool:
        return True

    def can_read(self, context: dict[str, Any]) -> bool:
        return True

    def can_update(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.USER) and self.administers_parent_event()

    def can_delete(self, context: dict[str, Any]) -> bool:
        return True
