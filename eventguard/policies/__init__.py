"""
Policy system for eventguard.

One policy class per resource type decides CRUD actions for the acting
principal. Policies are looked up through a PolicyRegistry keyed by
the resource's runtime type.

Quick Start:
    >>> from eventguard.policies import PolicyRegistry
    >>>
    >>> registry = PolicyRegistry.with_defaults()
    >>> policy = registry.get_policy_instance(event, user)
    >>> if policy.can("EVENT_UPDATE"):
    ...     save(event)
"""

from eventguard.policies.base import (
    Policy,
    PolicyWithScope,
    Scope,
)
from eventguard.policies.builtin import (
    EventScopedPolicy,
    OpenPolicy,
)
from eventguard.policies.defaults import (
    DEFAULT_POLICIES,
    register_default_policies,
)
from eventguard.policies.event import EventPolicy
from eventguard.policies.participation import ParticipationPolicy
from eventguard.policies.registry import (
    PolicyRegistry,
    get_global_registry,
    reset_global_registry,
)
from eventguard.policies.reward import RewardPolicy
from eventguard.policies.team_registration import TeamRegistrationPolicy
from eventguard.policies.team_sponsor import TeamSponsorPolicy
from eventguard.policies.user import UserPolicy

__all__ = [
    # Base classes
    "Policy",
    "PolicyWithScope",
    "Scope",
    "OpenPolicy",
    "EventScopedPolicy",
    # Registry
    "PolicyRegistry",
    "get_global_registry",
    "reset_global_registry",
    "DEFAULT_POLICIES",
    "register_default_policies",
    # Resource policies
    "EventPolicy",
    "ParticipationPolicy",
    "RewardPolicy",
    "TeamRegistrationPolicy",
    "TeamSponsorPolicy",
    "UserPolicy",
]
