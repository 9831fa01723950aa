"""
Reusable policy building blocks.

OpenPolicy backs resources that are intentionally unguarded.
EventScopedPolicy backs resources that have no owner of their own and
borrow their parent event's creator and managers instead.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from eventguard.accessors import administers_event
from eventguard.entities import Event
from eventguard.policies.base import Policy

logger = logging.getLogger(__name__)


class OpenPolicy(Policy[Any]):
    """
    Policy that allows every CRUD action to anyone, anonymous included.

    Registering it documents that a resource is open on purpose,
    rather than merely unguarded.
    """

    requires_identity: ClassVar[bool] = False

    def can_create(self, context: dict[str, Any]) -> bool:
        return True

    def can_read(self, context: dict[str, Any]) -> bool:
        return True

    def can_update(self, context: dict[str, Any]) -> bool:
        return True

    def can_delete(self, context: dict[str, Any]) -> bool:
        return True


class EventScopedPolicy(Policy[Any]):
    """
    Base for policies whose ownership is delegated to a parent event.

    Subclasses implement `parent_event()`; `administers_parent_event()`
    then tells whether the principal created or manages that event.
    """

    def parent_event(self) -> Event:
        raise NotImplementedError

    def administers_parent_event(self) -> bool:
        event = self.parent_event()
        result = administers_event(event, self.user)
        logger.debug(
            f"{self.__class__.__name__}: user '{self.principal_label()}' "
            f"{'administers' if result else 'does not administer'} event #{event.id}"
        )
        return result
