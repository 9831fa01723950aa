"""
Policy registry for eventguard.

Maps resource types to the policy class that rules on them. Lookups
go by the runtime type of a resource instance, walking its MRO so a
subclass of a registered entity resolves to the same policy.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from eventguard.exceptions import PolicyNotFoundError, UnrecognizedActionError

if TYPE_CHECKING:
    from eventguard.policies.base import Policy

logger = logging.getLogger(__name__)


class PolicyRegistry:
    """
    Registry for policy classes.

    Features:
        - Decorator-based registration (@registry.policy(Event))
        - Lookup by resource instance or type, MRO aware
        - Reverse lookup from an action id to its policy
        - Thread-safe operations

    Example:
        >>> registry = PolicyRegistry()
        >>>
        >>> @registry.policy(Badge)
        ... class BadgePolicy(Policy):
        ...     action_prefix = "BADGE"
        ...     def can_read(self, context: dict) -> bool:
        ...         return True
        >>>
        >>> registry.get_policy_for(badge)
        <class 'BadgePolicy'>

    There is no default policy: an unregistered resource type is a
    wiring defect and raises PolicyNotFoundError.

    Thread Safety:
        All operations are thread-safe via internal locking.
    """

    def __init__(self) -> None:
        self._policies: dict[type, type[Policy]] = {}
        self._lock = threading.RLock()

    @classmethod
    def with_defaults(cls) -> PolicyRegistry:
        """Create a registry preloaded with the builtin event policies."""
        from eventguard.policies.defaults import register_default_policies

        registry = cls()
        register_default_policies(registry)
        return registry

    def policy(self, resource_type: type) -> Callable[[type[Policy]], type[Policy]]:
        """
        Decorator for registering a policy class.

        Args:
            resource_type: The entity class this policy rules on.

        Example:
            >>> @registry.policy(Reward)
            ... class RewardPolicy(Policy):
            ...     action_prefix = "REWARD"
        """
        def decorator(policy_class: type[Policy]) -> type[Policy]:
            self.register(resource_type, policy_class)
            return policy_class
        return decorator

    def register(self, resource_type: type, policy_class: type[Policy]) -> None:
        """
        Register a policy class for a resource type.

        Registering a type twice replaces the earlier policy.

        Example:
            >>> registry.register(Event, EventPolicy)
        """
        with self._lock:
            if resource_type in self._policies:
                existing = self._policies[resource_type].__name__
                logger.warning(
                    f"Overwriting policy for '{resource_type.__name__}': "
                    f"{existing} -> {policy_class.__name__}"
                )

            self._policies[resource_type] = policy_class
            policy_class._resource_type = resource_type

            logger.debug(
                f"Registered policy '{policy_class.__name__}' for "
                f"resource type '{resource_type.__name__}'"
            )

    def get_policy(self, resource_type: type) -> type[Policy]:
        """
        Get the policy class for a resource type.

        Raises:
            PolicyNotFoundError: If neither the type nor any of its
                bases has a registered policy.
        """
        with self._lock:
            for candidate in resource_type.__mro__:
                if candidate in self._policies:
                    return self._policies[candidate]

            available = sorted(t.__name__ for t in self._policies)
        raise PolicyNotFoundError(resource_type.__name__, available)

    def get_policy_for(self, resource: Any) -> type[Policy]:
        """Get the policy class for a resource instance."""
        return self.get_policy(type(resource))

    def get_policy_instance(self, resource: Any, user: Any) -> Policy:
        """
        Get an instantiated policy for a resource.

        Example:
            >>> policy = registry.get_policy_instance(event, user)
            >>> policy.can("EVENT_READ")
        """
        policy_class = self.get_policy_for(resource)
        return policy_class(user, resource)

    def policy_for_action(self, action: str) -> type[Policy]:
        """
        Find the registered policy answering an action id.

        Raises:
            UnrecognizedActionError: If no registered policy knows it.
        """
        with self._lock:
            policies = list(self._policies.values())

        for policy_class in policies:
            if policy_class.handles(action):
                return policy_class
        raise UnrecognizedActionError(action)

    def has_policy(self, resource_type: type) -> bool:
        with self._lock:
            return any(t in self._policies for t in resource_type.__mro__)

    def list_policies(self) -> dict[str, str]:
        """
        List all registered policies.

        Returns:
            Dictionary mapping resource type names to policy class names.

        Example:
            >>> registry.list_policies()
            {'Event': 'EventPolicy', 'Reward': 'RewardPolicy'}
        """
        with self._lock:
            return {
                resource_type.__name__: policy.__name__
                for resource_type, policy in self._policies.items()
            }

    def unregister(self, resource_type: type) -> bool:
        """
        Unregister the policy for a resource type.

        Returns:
            True if a policy was unregistered, False if none was registered.
        """
        with self._lock:
            if resource_type in self._policies:
                del self._policies[resource_type]
                logger.debug(f"Unregistered policy for '{resource_type.__name__}'")
                return True
            return False

    def clear(self) -> None:
        """Clear all registered policies."""
        with self._lock:
            self._policies.clear()
            logger.debug("Cleared all registered policies")


# Global registry instance for convenience
_global_registry: PolicyRegistry | None = None
_global_registry_lock = threading.Lock()


def get_global_registry() -> PolicyRegistry:
    """
    Get the process-wide registry, preloaded with the builtin policies.

    Example:
        >>> from eventguard.policies.registry import get_global_registry
        >>> get_global_registry().list_policies()["Event"]
        'EventPolicy'
    """
    global _global_registry
    if _global_registry is not None:
        return _global_registry
    with _global_registry_lock:
        # Double-check after acquiring lock
        if _global_registry is None:
            _global_registry = PolicyRegistry.with_defaults()
        return _global_registry


def reset_global_registry() -> None:
    """
    Reset the global registry.

    The next get_global_registry() call rebuilds it from the defaults.
    Primarily useful for testing.
    """
    global _global_registry
    with _global_registry_lock:
        if _global_registry is not None:
            _global_registry.clear()
        _global_registry = None
