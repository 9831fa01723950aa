"""User policy."""

from __future__ import annotations

from typing import Any

from eventguard.entities import User
from eventguard.policies.base import Policy
from eventguard.roles import Role


class UserPolicy(Policy[User]):
    """
    Only deletion is ruled here: a user may delete their own account,
    and organisers (or above) may delete any account.

    USER_CREATE, USER_READ and USER_UPDATE are deliberately absent, so
    asking for them raises UnrecognizedActionError.
    """

    CREATE = "USER_CREATE"
    READ = "USER_READ"
    UPDATE = "USER_UPDATE"
    DELETE = "USER_DELETE"

    action_prefix = "USER"

    def can_delete(self, context: dict[str, Any]) -> bool:
        return self.is_principal(self.resource) or self.granted(Role.ORGANISER)
