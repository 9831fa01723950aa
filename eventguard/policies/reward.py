"""
Reward policy.

A reward is administered by its manager. Rewards without a manager are
locked: nobody can update them, and only admins can delete them.
"""

from __future__ import annotations

from typing import Any

from eventguard.accessors import owns_reward
from eventguard.entities import Reward
from eventguard.policies.base import Policy
from eventguard.roles import Role


class RewardPolicy(Policy[Reward]):
    CREATE = "REWARD_CREATE"
    READ = "REWARD_READ"
    UPDATE = "REWARD_UPDATE"
    DELETE = "REWARD_DELETE"

    action_prefix = "REWARD"

    def can_create(self, context: dict[str, Any]) -> bool:
        return True

    def can_read(self, context: dict[str, Any]) -> bool:
        return True

    def can_update(self, context: dict[str, Any]) -> bool:
        return self.granted(Role.USER) and self.is_owner()

    def can_delete(self, context: dict[str, Any]) -> bool:
        if self.granted(Role.ADMIN):
            return True
        return self.granted(Role.USER) and self.is_owner()

    def is_owner(self) -> bool:
        return self.resource is not None and owns_reward(self.resource, self.user)
