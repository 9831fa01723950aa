"""
Decorators for eventguard authorization.

Standalone counterparts of `EventGuard.authorize` for modules that
define handlers away from the guard instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from eventguard.core import EventGuard, get_default_guard

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def requires(
    action: str,
    guard: EventGuard | None = None,
    resource_param: str = "resource",
    principal_param: str = "principal",
    context_param: str | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Standalone decorator guarding a handler with an action id.

    The guard is resolved when the decorator is applied; without one,
    the default guard bound to the global registry is used.

    Args:
        action: Action id to authorize (e.g. "REWARD_UPDATE").
        guard: The EventGuard to decide with.
        resource_param: Parameter name holding the resource.
        principal_param: Parameter name holding the principal.
        context_param: Optional parameter name holding the policy context.

    Returns:
        A decorator function.

    Example:
        >>> from eventguard.decorators import requires
        >>>
        >>> @requires("REWARD_UPDATE", resource_param="reward")
        ... def rename_reward(reward: Reward, name: str, principal: User) -> None:
        ...     reward.name = name
    """
    active_guard = guard or get_default_guard()
    logger.debug(f"Guarding handler with '{action}'")
    return active_guard.authorize(
        action,
        resource_param=resource_param,
        principal_param=principal_param,
        context_param=context_param,
    )
