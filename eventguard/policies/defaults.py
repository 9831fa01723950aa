"""The builtin resource type -> policy table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventguard.entities import (
    Event,
    Participation,
    Reward,
    TeamRegistration,
    TeamSponsor,
    User,
)
from eventguard.policies.base import Policy
from eventguard.policies.event import EventPolicy
from eventguard.policies.participation import ParticipationPolicy
from eventguard.policies.reward import RewardPolicy
from eventguard.policies.team_registration import TeamRegistrationPolicy
from eventguard.policies.team_sponsor import TeamSponsorPolicy
from eventguard.policies.user import UserPolicy

if TYPE_CHECKING:
    from eventguard.policies.registry import PolicyRegistry

DEFAULT_POLICIES: dict[type, type[Policy]] = {
    Event: EventPolicy,
    Participation: ParticipationPolicy,
    Reward: RewardPolicy,
    TeamSponsor: TeamSponsorPolicy,
    TeamRegistration: TeamRegistrationPolicy,
    User: UserPolicy,
}


def register_default_policies(registry: PolicyRegistry) -> None:
    for resource_type, policy_class in DEFAULT_POLICIES.items():
        registry.register(resource_type, policy_class)
