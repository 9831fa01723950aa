"""
Custom exceptions for eventguard.

Two families live here. Configuration and data-integrity faults
(unknown actions, unregistered resource types, missing required
relations) are raised by the dispatcher and are never folded into an
allow/deny answer. AuthorizationError is the denial exception raised
by the guard helpers that abort a handler.
"""

from __future__ import annotations

from typing import Any


class EventGuardError(Exception):
    """
    Base exception for all eventguard errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.

    Example:
        >>> try:
        ...     guard.decide("EVENT_UPDATE", event, user)
        ... except EventGuardError as e:
        ...     logger.error(f"Authorization fault: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class AuthorizationError(EventGuardError):
    """
    Raised when a principal is not allowed to perform an action.

    Only the raising helpers (`EventGuard.authorize_or_raise` and the
    handler decorators) produce this; `decide` itself returns a deny
    result instead.

    Attributes:
        user: Identifier of the principal, or "anonymous".
        action: The action id that was attempted (e.g. "EVENT_DELETE").
        resource: Description of the targeted resource.
        reason: Why the request was denied.

    Example:
        >>> raise AuthorizationError(
        ...     user="42",
        ...     action="EVENT_DELETE",
        ...     resource="Event#7",
        ...     reason="Only the event creator can delete it",
        ... )
    """

    def __init__(
        self,
        user: str,
        action: str,
        resource: str,
        reason: str | None = None,
    ) -> None:
        self.user = user
        self.action = action
        self.resource = resource
        self.reason = reason or "Authorization denied"

        message = (
            f"Authorization denied: User '{user}' cannot perform "
            f"'{action}' on resource '{resource}'. Reason: {self.reason}"
        )
        details = {
            "user": user,
            "action": action,
            "resource": resource,
            "reason": self.reason,
        }
        super().__init__(message, details)


class ConfigurationError(EventGuardError):
    """
    Raised when the guard is wired incorrectly.

    Attributes:
        config_key: The configuration item that has an issue.
        expected: What was expected.
        received: What was actually provided.

    Example:
        >>> raise ConfigurationError(
        ...     config_key="principal_type",
        ...     expected="a class",
        ...     received="user",
        ... )
    """

    def __init__(
        self,
        config_key: str,
        expected: str | None = None,
        received: Any = None,
    ) -> None:
        self.config_key = config_key
        self.expected = expected
        self.received = received

        message = f"Configuration error for '{config_key}'"
        if expected:
            message += f": expected {expected}"
        if received is not None:
            message += f", got {received!r}"

        details = {
            "config_key": config_key,
            "expected": expected,
            "received": str(received) if received is not None else None,
        }
        super().__init__(message, details)


class UnrecognizedActionError(ConfigurationError):
    """
    Raised when an action id cannot be evaluated for a resource type.

    This is a caller defect (a typo in an action id, an action routed to
    the wrong resource, a verb the policy does not cover), so it is
    surfaced as a fault rather than silently denied.

    Attributes:
        action: The action id that was not recognized.
        resource_type: Name of the resource type it was evaluated against.
        known_actions: Action ids the policy does understand.
    """

    def __init__(
        self,
        action: str,
        resource_type: str | None = None,
        known_actions: list[str] | None = None,
    ) -> None:
        self.action = action
        self.resource_type = resource_type
        self.known_actions = known_actions or []

        expected = None
        if self.known_actions:
            expected = f"one of: {', '.join(self.known_actions)}"
        super().__init__(
            config_key=f"action:{resource_type}" if resource_type else "action",
            expected=expected,
            received=action,
        )
        self.message = f"Unrecognized action '{action}'"
        if resource_type:
            self.message += f" for resource type '{resource_type}'"
        self.details["known_actions"] = self.known_actions
        self.args = (self.message,)


class PolicyNotFoundError(UnrecognizedActionError):
    """
    Raised when no policy is registered for a resource type.

    Every action on such a resource is unrecognized, which is why this
    is a subtype of UnrecognizedActionError.

    Attributes:
        resource_type: Name of the resource type without a policy.
        available_policies: Resource types that do have one.

    Example:
        >>> raise PolicyNotFoundError(
        ...     resource_type="Game",
        ...     available_policies=["Event", "Reward"],
        ... )
    """

    def __init__(
        self,
        resource_type: str,
        available_policies: list[str] | None = None,
        action: str | None = None,
    ) -> None:
        super().__init__(action or "*", resource_type)
        self.available_policies = available_policies or []

        self.message = f"No policy found for resource type '{resource_type}'"
        if self.available_policies:
            self.message += f". Available policies: {', '.join(self.available_policies)}"
        self.details["available_policies"] = self.available_policies
        self.args = (self.message,)


class MissingRelationError(EventGuardError):
    """
    Raised when a required relation is absent on a loaded resource.

    The persistence layer guarantees these relations (an event always
    has a creator, a participation always belongs to an event), so a
    missing one is a data-integrity fault, not a denial.

    Attributes:
        resource_type: Type of the resource being inspected.
        resource_id: Its identifier, if persisted.
        relation: The relation that was expected to be populated.
    """

    def __init__(
        self,
        resource_type: str,
        relation: str,
        resource_id: Any = None,
    ) -> None:
        self.resource_type = resource_type
        self.relation = relation
        self.resource_id = resource_id

        message = f"{resource_type}#{resource_id} has no '{relation}'"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
            "relation": relation,
        }
        super().__init__(message, details)
