"""
Policy base classes for eventguard.

Each resource type has one policy class (a "voter"). An action id such
as "EVENT_UPDATE" is split into the policy's prefix ("EVENT") and a
verb ("UPDATE"), and the verb is answered by the matching
`can_<verb>` method. An action the policy has no method for is a
wiring defect and raises UnrecognizedActionError instead of being
denied.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, ClassVar, Generic, TypeVar

from eventguard.accessors import same_principal
from eventguard.exceptions import UnrecognizedActionError
from eventguard.roles import Role

logger = logging.getLogger(__name__)

# Type variable for the resource being authorized
T = TypeVar("T")


class Policy(ABC, Generic[T]):
    """
    Abstract base class for all eventguard policies.

    Attributes:
        user: The acting principal. Policies that require identity are
            only instantiated with an authenticated user; open policies
            may receive None or any other principal object.
        resource: The resource instance being accessed. For CREATE it
            is the transient, not yet persisted snapshot.

    Example:
        >>> class BadgePolicy(Policy[Badge]):
        ...     action_prefix = "BADGE"
        ...
        ...     def can_read(self, context: dict) -> bool:
        ...         return True
        ...
        ...     def can_delete(self, context: dict) -> bool:
        ...         return self.granted(Role.ADMIN)

    The `context` parameter carries request data a rule may need
    (e.g. the `owner_id` URI variable of a collection endpoint).
    """

    # Prefix of the action ids this policy answers, e.g. "EVENT"
    action_prefix: ClassVar[str] = ""

    # Open policies set this to False and accept anonymous principals
    requires_identity: ClassVar[bool] = True

    # Set by PolicyRegistry.register
    _resource_type: type | None = None

    def __init__(self, user: Any, resource: T | None = None) -> None:
        self.user = user
        self.resource = resource

    def authorize(self, action: str, context: dict[str, Any] | None = None) -> bool:
        """
        Decide whether the principal may perform `action`.

        Args:
            action: Full action id (e.g. "EVENT_DELETE").
            context: Additional request data for the rule.

        Returns:
            True if allowed, False otherwise.

        Raises:
            UnrecognizedActionError: If the action id is not one of
                this policy's actions.
        """
        verb = self.verb_for(action)
        method = getattr(self, f"can_{verb}", None) if verb else None

        if method is None:
            raise UnrecognizedActionError(
                action,
                resource_type=self.resource_type_name(),
                known_actions=self.get_available_actions(),
            )

        # Copy to avoid mutating caller's dict
        allowed = bool(method(dict(context) if context else {}))

        logger.debug(
            f"{self.__class__.__name__}: '{action}' for user "
            f"'{self.principal_label()}' -> {'allowed' if allowed else 'denied'}"
        )
        return allowed

    def can(self, action: str, context: dict[str, Any] | None = None) -> bool:
        """Alias for authorize() for a more fluent API."""
        return self.authorize(action, context)

    def granted(self, role: Role | str) -> bool:
        """Check whether the principal holds `role` or a role implying it."""
        has_at_least = getattr(self.user, "has_at_least", None)
        return bool(has_at_least and has_at_least(role))

    def is_principal(self, other: Any) -> bool:
        return same_principal(self.user, other)

    def principal_label(self) -> str:
        user_id = getattr(self.user, "id", None)
        return "anonymous" if user_id is None else str(user_id)

    @classmethod
    def verb_for(cls, action: str) -> str | None:
        """
        Extract the lower-cased verb from an action id of this policy.

        Returns None when the id carries another policy's prefix.

        Example:
            >>> EventPolicy.verb_for("EVENT_UPDATE")
            'update'
            >>> EventPolicy.verb_for("REWARD_UPDATE") is None
            True
        """
        prefix = f"{cls.action_prefix}_"
        if not cls.action_prefix or not action.startswith(prefix):
            return None
        verb = action[len(prefix):]
        if not verb.isidentifier() or verb != verb.upper():
            return None
        return verb.lower()

    @classmethod
    def handles(cls, action: str) -> bool:
        """Check whether `action` is one of this policy's action ids."""
        return cls.verb_for(action) in cls.get_available_verbs()

    @classmethod
    def get_available_verbs(cls) -> list[str]:
        verbs = []
        for name in dir(cls):
            if name.startswith("can_") and callable(getattr(cls, name)):
                verbs.append(name[4:])
        return sorted(verbs)

    @classmethod
    def get_available_actions(cls) -> list[str]:
        """
        All action ids this policy answers.

        Example:
            >>> RewardPolicy.get_available_actions()
            ['REWARD_CREATE', 'REWARD_DELETE', 'REWARD_READ', 'REWARD_UPDATE']
        """
        return [f"{cls.action_prefix}_{verb.upper()}" for verb in cls.get_available_verbs()]

    @classmethod
    def resource_type_name(cls) -> str:
        if cls._resource_type is not None:
            return cls._resource_type.__name__
        name = cls.__name__
        return name[:-6] if name.endswith("Policy") else name


class Scope(Generic[T]):
    """
    Base class for filtering collections based on the principal.

    Used for collection endpoints, where a list of loaded resources is
    reduced to what the principal may see.

    Example:
        >>> visible = EventPolicy.Scope(user, all_events).resolve()
    """

    def __init__(
        self,
        user: Any,
        scope: list[T],
        context: dict[str, Any] | None = None,
    ) -> None:
        self.user = user
        self.scope = scope
        self.context = dict(context) if context else {}

    def resolve(self) -> list[T]:
        """
        Filter the scope to authorized items.

        Subclasses override this; the default returns nothing.
        """
        return []


class PolicyWithScope(Policy[T]):
    """
    Policy class that carries a Scope inner class.

    Example:
        >>> class EventPolicy(PolicyWithScope[Event]):
        ...     class Scope(Scope[Event]):
        ...         def resolve(self) -> list[Event]:
        ...             return [e for e in self.scope if e.creator is self.user]
    """

    class Scope(Scope[T]):
        """Default scope that returns empty list."""
        pass
