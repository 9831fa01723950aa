"""
Core EventGuard class and the authorization dispatcher.

EventGuard resolves the policy registered for a resource's runtime
type, screens out anonymous or foreign principals for policies that
need an identity, and returns the policy's verdict as an
AuthorizationResult. Configuration faults (unregistered types, unknown
actions) and data-integrity faults (missing required relations) are
raised, never turned into a deny.
"""

from __future__ import annotations

import contextvars
import functools
import inspect
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ParamSpec, TypeVar

from eventguard.entities import User
from eventguard.exceptions import (
    AuthorizationError,
    ConfigurationError,
    PolicyNotFoundError,
    UnrecognizedActionError,
)
from eventguard.policies.base import Policy
from eventguard.policies.registry import PolicyRegistry, get_global_registry
from eventguard.types import AuthorizationResult

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Principal of the request being handled, for handlers that do not take it as an argument
_current_principal: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "eventguard_principal", default=None
)


def get_current_principal() -> Any:
    """Get the current principal from context."""
    return _current_principal.get()


@dataclass(frozen=True)
class GuardConfig:
    """
    Configuration for an EventGuard.

    Attributes:
        principal_type: Class an authenticated principal must be an
            instance of. Anything else, None included, is denied by
            policies that require identity.
        log_denials: Whether denials are logged at INFO level.

    Example:
        >>> config = GuardConfig(principal_type=User, log_denials=False)
        >>> guard = EventGuard(config=config)
    """

    principal_type: type = User
    log_denials: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.principal_type, type):
            raise ConfigurationError(
                config_key="principal_type",
                expected="a class",
                received=self.principal_type,
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "principal_type": self.principal_type.__name__,
            "log_denials": self.log_denials,
        }


def _describe(resource: Any) -> str:
    resource_id = getattr(resource, "id", None)
    name = type(resource).__name__
    return name if resource_id is None else f"{name}#{resource_id}"


def _principal_label(principal: Any) -> str:
    user_id = getattr(principal, "id", None)
    return "anonymous" if user_id is None else str(user_id)


class EventGuard:
    """
    Main entry point for authorization decisions.

    Example:
        >>> from eventguard import EventGuard, User, Event
        >>>
        >>> guard = EventGuard()
        >>> organiser = User(id=1, roles=["ROLE_ORGANISER"])
        >>> event = Event(id=7, creator=organiser)
        >>>
        >>> guard.decide("EVENT_UPDATE", event, organiser).allowed
        True
        >>> guard.decide("EVENT_UPDATE", event, None).allowed
        False

    Decisions read the resource graph and never write to it, to the
    principal or to the guard, so one guard can serve concurrent
    requests without coordination.
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        config: GuardConfig | None = None,
    ) -> None:
        """
        Initialize EventGuard.

        Args:
            registry: Policy registry to dispatch through. Defaults to
                the global registry, preloaded with the builtin policies.
            config: Guard configuration.
        """
        self._registry = registry
        self._config = config or GuardConfig()

    @property
    def registry(self) -> PolicyRegistry:
        """The registry in use; the global one unless a registry was given."""
        if self._registry is not None:
            return self._registry
        return get_global_registry()

    @property
    def config(self) -> GuardConfig:
        return self._config

    def policy(self, resource_type: type) -> Callable[[type[Policy]], type[Policy]]:
        """
        Decorator to register a policy on this guard's registry.

        Example:
            >>> @guard.policy(Badge)
            ... class BadgePolicy(Policy):
            ...     action_prefix = "BADGE"
        """
        return self.registry.policy(resource_type)

    # ==================== Authorization Methods ====================

    def resolve_policy(self, action: str, resource: Any) -> type[Policy]:
        """
        Find the policy for `resource` and check it knows `action`.

        Raises:
            PolicyNotFoundError: No policy for the resource's type.
            UnrecognizedActionError: The policy does not know the action.
        """
        try:
            policy_class = self.registry.get_policy_for(resource)
        except PolicyNotFoundError as e:
            logger.error(f"No policy for '{action}' on {_describe(resource)}: {e.message}")
            raise

        if not policy_class.handles(action):
            logger.error(
                f"{policy_class.__name__} cannot evaluate '{action}' "
                f"on {_describe(resource)}"
            )
            raise UnrecognizedActionError(
                action,
                resource_type=type(resource).__name__,
                known_actions=policy_class.get_available_actions(),
            )
        return policy_class

    def is_authenticated(self, principal: Any) -> bool:
        """Check that `principal` is of the configured authenticated type."""
        return isinstance(principal, self._config.principal_type)

    def decide(
        self,
        action: str,
        resource: Any,
        principal: Any,
        context: dict[str, Any] | None = None,
    ) -> AuthorizationResult:
        """
        Decide whether `principal` may perform `action` on `resource`.

        Args:
            action: Action id scoped to the resource type (e.g. "EVENT_UPDATE").
            resource: The loaded resource, or the transient snapshot for CREATE.
            principal: The authenticated principal, or None when anonymous.
            context: Additional request data passed to the policy.

        Returns:
            An allowed or denied AuthorizationResult.

        Raises:
            PolicyNotFoundError: No policy is registered for the resource type.
            UnrecognizedActionError: The action does not belong to that policy.
            MissingRelationError: A required relation is absent.

        Example:
            >>> result = guard.decide("REWARD_DELETE", reward, admin)
            >>> if not result.allowed:
            ...     print(f"Denied: {result.reason}")
        """
        policy_class = self.resolve_policy(action, resource)
        policy_name = policy_class.__name__
        metadata = {"action": action, "resource_type": type(resource).__name__}

        logger.debug(
            f"Evaluating: user={_principal_label(principal)}, action={action}, "
            f"resource={_describe(resource)}"
        )

        if policy_class.requires_identity and not self.is_authenticated(principal):
            if principal is None:
                reason = "No authenticated principal"
            else:
                reason = (
                    f"Principal of type '{type(principal).__name__}' is not an "
                    f"authenticated {self._config.principal_type.__name__}"
                )
            return self._deny(action, resource, principal, reason, policy_name, metadata)

        policy = policy_class(principal, resource)
        if policy.authorize(action, context):
            reason = f"Policy {policy_name} allowed action '{action}'"
            logger.debug(f"Result: allowed=True, reason={reason}")
            return AuthorizationResult.allow(
                reason=reason,
                policies=[policy_name],
                metadata=metadata,
            )

        reason = f"Policy {policy_name} denied action '{action}'"
        return self._deny(action, resource, principal, reason, policy_name, metadata)

    def _deny(
        self,
        action: str,
        resource: Any,
        principal: Any,
        reason: str,
        policy_name: str,
        metadata: dict[str, Any],
    ) -> AuthorizationResult:
        if self._config.log_denials:
            logger.info(
                f"Denied '{action}' on {_describe(resource)} for user "
                f"'{_principal_label(principal)}': {reason}"
            )
        return AuthorizationResult.deny(
            reason=reason,
            policies=[policy_name],
            metadata=metadata,
        )

    def can(
        self,
        action: str,
        resource: Any,
        principal: Any,
        context: dict[str, Any] | None = None,
    ) -> bool:
        """
        Boolean form of decide().

        Example:
            >>> if guard.can("EVENT_DELETE", event, user):
            ...     repository.delete(event)
        """
        return self.decide(action, resource, principal, context).allowed

    def authorize_or_raise(
        self,
        action: str,
        resource: Any,
        principal: Any,
        context: dict[str, Any] | None = None,
    ) -> AuthorizationResult:
        """
        Decide and raise if denied.

        Raises:
            AuthorizationError: If the decision is a deny.
        """
        result = self.decide(action, resource, principal, context)

        if not result.allowed:
            raise AuthorizationError(
                user=_principal_label(principal),
                action=action,
                resource=_describe(resource),
                reason=result.reason,
            )

        return result

    def scope(
        self,
        resource_type: type,
        principal: Any,
        items: list[Any],
        context: dict[str, Any] | None = None,
    ) -> list[Any]:
        """
        Filter a collection to the items `principal` may see.

        Raises:
            PolicyNotFoundError: No policy for `resource_type`.
            ConfigurationError: The policy defines no Scope.

        Example:
            >>> guard.scope(Event, organiser, events, {"owner_id": "1"})
        """
        policy_class = self.registry.get_policy(resource_type)
        scope_class = getattr(policy_class, "Scope", None)
        if scope_class is None:
            raise ConfigurationError(
                config_key=f"scope:{resource_type.__name__}",
                expected=f"{policy_class.__name__}.Scope",
            )

        if policy_class.requires_identity and not self.is_authenticated(principal):
            return []
        return scope_class(principal, items, context).resolve()

    # ==================== Decorator ====================

    def authorize(
        self,
        action: str,
        resource_param: str = "resource",
        principal_param: str = "principal",
        context_param: str | None = None,
    ) -> Callable[[Callable[P, T]], Callable[P, T]]:
        """
        Decorator that runs a handler only when the action is allowed.

        The resource is read from the `resource_param` argument; the
        principal from `principal_param`, falling back to the current
        principal context. On deny the handler is not called and
        AuthorizationError is raised. Works with sync and async handlers.

        Example:
            >>> @guard.authorize("EVENT_DELETE", resource_param="event")
            ... def delete_event(event: Event, principal: User) -> None:
            ...     repository.delete(event)
        """
        def decorator(func: Callable[P, T]) -> Callable[P, T]:
            signature = inspect.signature(func)

            def check(args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
                bound = signature.bind_partial(*args, **kwargs)
                if resource_param not in bound.arguments:
                    raise ConfigurationError(
                        config_key="resource_param",
                        expected=f"argument '{resource_param}' on {func.__name__}",
                    )
                resource = bound.arguments[resource_param]
                principal = bound.arguments.get(principal_param)
                if principal is None:
                    principal = get_current_principal()
                context = bound.arguments.get(context_param) if context_param else None
                self.authorize_or_raise(action, resource, principal, context)

            if inspect.iscoroutinefunction(func):
                @functools.wraps(func)
                async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
                    check(args, kwargs)
                    return await func(*args, **kwargs)
                return async_wrapper  # type: ignore

            @functools.wraps(func)
            def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
                check(args, kwargs)
                return func(*args, **kwargs)
            return sync_wrapper

        return decorator

    # ==================== Context Managers ====================

    @contextmanager
    def principal_context(self, principal: Any) -> Iterator[Any]:
        """
        Context manager to set the current principal.

        Example:
            >>> with guard.principal_context(user):
            ...     delete_event(event=event)
        """
        token = _current_principal.set(principal)
        try:
            yield principal
        finally:
            _current_principal.reset(token)


_default_guard: EventGuard | None = None
_default_guard_lock = threading.Lock()


def get_default_guard() -> EventGuard:
    """Get the guard bound to the global registry, creating it on first use."""
    global _default_guard
    if _default_guard is not None:
        return _default_guard
    with _default_guard_lock:
        if _default_guard is None:
            _default_guard = EventGuard()
        return _default_guard


def reset_default_guard() -> None:
    """Drop the default guard. Primarily useful for testing."""
    global _default_guard
    with _default_guard_lock:
        _default_guard = None


def decide(
    action: str,
    resource: Any,
    principal: Any,
    context: dict[str, Any] | None = None,
) -> AuthorizationResult:
    """
    Decide with the default guard.

    Example:
        >>> from eventguard import decide
        >>> decide("TEAM_SPONSOR_UPDATE", sponsor, None).allowed
        True
    """
    return get_default_guard().decide(action, resource, principal, context)
