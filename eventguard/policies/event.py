"""
Event policy.

Organisers create events and control the ones they created; admins
can read and update every event. Deleting is reserved to the creator
alone, whatever roles anyone else holds.
"""

from __future__ import annotations

import logging
from typing import Any

from eventguard.accessors import is_event_creator
from eventguard.entities import Event
from eventguard.policies.base import PolicyWithScope, Scope
from eventguard.roles import Role

logger = logging.getLogger(__name__)

# Context key carrying the `{id}` of a /users/{id}/events listing
OWNER_ID = "owner_id"


class EventPolicy(PolicyWithScope[Event]):
    """
    Rules:
        CREATE: ORGANISER (or above). The creator is assigned by the
            caller after the decision, so no ownership check applies.
        READ: ADMIN; or ORGANISER who created the event; or ORGANISER
            listing their own created events.
        UPDATE: ADMIN; or ORGANISER who created the event.
        DELETE: the creator only.
    """

    CREATE = "EVENT_CREATE"
    READ = "EVENT_READ"
    UPDATE = "EVENT_UPDATE"
    DELETE = "EVENT_DELETE"

    action_prefix = "EVENT"

    def can_create(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.ORGANISER)

    def can_read(self, context: dict[str, Any]) -> bool:
        if self.granted(Role.ADMIN):
            return True
        if not self.granted(Role.ORGANISER):
            return False
        return self.is_creator() or self.lists_own_events(context)

    def can_update(self, context: dict[str, Any]) -> bool:
        if self.granted(Role.ADMIN):
            return True
        return self.granted(Role.ORGANISER) and self.is_creator()

    def can_delete(self, context: dict[str, Any]) -> bool:
        return self.is_creator()

    def is_creator(self) -> bool:
        return self.resource is not None and is_event_creator(self.resource, self.user)

    def lists_own_events(self, context: dict[str, Any]) -> bool:
        """True when the request targets the principal's created-events list."""
        owner_id = context.get(OWNER_ID)
        user_id = getattr(self.user, "id", None)
        if owner_id is None or user_id is None:
            return False
        # URI variables arrive as strings
        return str(owner_id) == str(user_id)

    class Scope(Scope[Event]):
        """Events of a listing the principal is allowed to read."""

        def resolve(self) -> list[Event]:
            return [
                event for event in self.scope
                if EventPolicy(self.user, event).can_read(self.context)
            ]
