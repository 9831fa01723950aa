"""
Core type definitions for eventguard.

Defines the action vocabulary shared by every policy and the result
object returned by the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Verb(Enum):
    """Operations a policy can rule on."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def action_id(prefix: str, verb: Verb | str) -> str:
    """
    Build an action identifier from a resource prefix and a verb.

    Example:
        >>> action_id("EVENT", Verb.DELETE)
        'EVENT_DELETE'
    """
    verb_name = verb.value if isinstance(verb, Verb) else str(verb).upper()
    return f"{prefix}_{verb_name}"


@dataclass(frozen=True)
class AuthorizationResult:
    """
    Outcome of a single authorization decision.

    Attributes:
        allowed: Whether the action is authorized.
        reason: Human-readable explanation of the decision.
        policies_evaluated: Names of the policies consulted.
        metadata: Additional information about the decision
            (e.g. the action id and resource type).

    Example:
        >>> result = AuthorizationResult.allow(
        ...     reason="EventPolicy allowed 'EVENT_READ'",
        ...     policies=["EventPolicy"],
        ... )
        >>> result.allowed
        True
    """
    allowed: bool
    reason: str | None = None
    policies_evaluated: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def allow(cls, reason: str | None = None,
              policies: list[str] | None = None,
              metadata: dict[str, Any] | None = None) -> AuthorizationResult:
        """Create an allowed result."""
        return cls(
            allowed=True,
            reason=reason,
            policies_evaluated=policies or [],
            metadata=metadata or {},
        )

    @classmethod
    def deny(cls, reason: str,
             policies: list[str] | None = None,
             metadata: dict[str, Any] | None = None) -> AuthorizationResult:
        """Create a denied result."""
        return cls(
            allowed=False,
            reason=reason,
            policies_evaluated=policies or [],
            metadata=metadata or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "allowed": self.allowed,
            "reason": self.reason,
            "policies_evaluated": self.policies_evaluated,
            "metadata": self.metadata,
        }
