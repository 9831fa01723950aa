"""
Role model for eventguard.

Roles are plain enum members held as a set on the principal. The
hierarchy between them (ADMIN implies ORGANISER implies USER) lives in
an explicit implication table instead of class inheritance, so a check
for ORGANISER is satisfied by an ADMIN only because the table says so.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class Role(Enum):
    """Roles an authenticated user can hold."""

    USER = "ROLE_USER"
    ORGANISER = "ROLE_ORGANISER"
    ADMIN = "ROLE_ADMIN"

    @classmethod
    def parse(cls, value: Role | str) -> Role:
        """
        Convert a role name to a Role.

        Accepts a Role, its member name ("ADMIN", "admin") or its
        framework name ("ROLE_ADMIN").

        Raises:
            ValueError: If the name does not match any role.
        """
        if isinstance(value, Role):
            return value

        normalized = str(value).strip().upper()
        if normalized.startswith("ROLE_"):
            normalized = normalized[5:]

        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Unknown role: {value!r}") from None

    def __str__(self) -> str:
        return self.value


# Each role maps to every role it satisfies, itself included
ROLE_HIERARCHY: dict[Role, frozenset[Role]] = {
    Role.USER: frozenset({Role.USER}),
    Role.ORGANISER: frozenset({Role.ORGANISER, Role.USER}),
    Role.ADMIN: frozenset({Role.ADMIN, Role.ORGANISER, Role.USER}),
}


def reachable_roles(roles: Iterable[Role | str]) -> frozenset[Role]:
    """
    Expand a role set through the hierarchy.

    Example:
        >>> sorted(r.name for r in reachable_roles([Role.ORGANISER]))
        ['ORGANISER', 'USER']
    """
    reached: set[Role] = set()
    for role in roles:
        reached |= ROLE_HIERARCHY[Role.parse(role)]
    return frozenset(reached)


def has_at_least(roles: Iterable[Role | str], required: Role | str) -> bool:
    """Check whether a role set satisfies `required` under the hierarchy."""
    return Role.parse(required) in reachable_roles(roles)
