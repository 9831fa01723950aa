"""
Tests for the Policy base class.

Tests cover:
- Action id parsing
- Dispatch to can_<verb> methods
- Unrecognized actions
- Role checks through the hierarchy
"""

from __future__ import annotations

from typing import Any

import pytest

from eventguard.entities import User
from eventguard.exceptions import UnrecognizedActionError
from eventguard.policies.base import Policy, PolicyWithScope, Scope
from eventguard.policies.event import EventPolicy
from eventguard.policies.reward import RewardPolicy
from eventguard.policies.team_sponsor import TeamSponsorPolicy
from eventguard.roles import Role


class BadgePolicy(Policy[dict]):
    action_prefix = "BADGE"

    def can_read(self, context: dict[str, Any]) -> bool:
        return True

    def can_update(self, context: dict[str, Any]) -> bool:
        context["touched"] = True
        return self.granted(Role.ORGANISER)


class TestActionParsing:
    """Tests for verb_for and handles."""

    def test_verb_for_own_prefix(self):
        assert EventPolicy.verb_for("EVENT_UPDATE") == "update"

    def test_verb_for_other_prefix(self):
        assert EventPolicy.verb_for("REWARD_UPDATE") is None

    def test_verb_for_lowercase_verb(self):
        assert EventPolicy.verb_for("EVENT_update") is None

    def test_verb_for_bare_prefix(self):
        assert EventPolicy.verb_for("EVENT_") is None
        assert EventPolicy.verb_for("EVENT") is None

    def test_multi_word_prefix(self):
        assert TeamSponsorPolicy.verb_for("TEAM_SPONSOR_DELETE") == "delete"
        assert TeamSponsorPolicy.handles("TEAM_SPONSOR_DELETE")

    def test_handles_only_defined_verbs(self):
        assert BadgePolicy.handles("BADGE_READ")
        assert not BadgePolicy.handles("BADGE_DELETE")

    def test_available_actions(self):
        assert RewardPolicy.get_available_actions() == [
            "REWARD_CREATE",
            "REWARD_DELETE",
            "REWARD_READ",
            "REWARD_UPDATE",
        ]

    def test_action_constants_match_available_actions(self):
        assert {
            EventPolicy.CREATE,
            EventPolicy.READ,
            EventPolicy.UPDATE,
            EventPolicy.DELETE,
        } == set(EventPolicy.get_available_actions())


class TestAuthorize:
    """Tests for Policy.authorize."""

    def test_dispatches_to_method(self, organiser: User, basic_user: User):
        assert BadgePolicy(organiser, {}).authorize("BADGE_UPDATE") is True
        assert BadgePolicy(basic_user, {}).authorize("BADGE_UPDATE") is False

    def test_can_alias(self, basic_user: User):
        assert BadgePolicy(basic_user, {}).can("BADGE_READ") is True

    def test_unknown_verb_raises(self, basic_user: User):
        with pytest.raises(UnrecognizedActionError) as exc_info:
            BadgePolicy(basic_user, {}).authorize("BADGE_DELETE")
        assert exc_info.value.action == "BADGE_DELETE"
        assert exc_info.value.known_actions == ["BADGE_READ", "BADGE_UPDATE"]

    def test_foreign_action_raises(self, basic_user: User):
        with pytest.raises(UnrecognizedActionError):
            BadgePolicy(basic_user, {}).authorize("EVENT_READ")

    def test_context_is_not_mutated(self, organiser: User):
        context = {"owner_id": "2"}
        BadgePolicy(organiser, {}).authorize("BADGE_UPDATE", context)
        assert context == {"owner_id": "2"}

    def test_granted_without_principal(self):
        assert BadgePolicy(None, {}).granted(Role.USER) is False

    def test_granted_follows_hierarchy(self, admin: User):
        assert BadgePolicy(admin, {}).granted(Role.ORGANISER) is True

    def test_resource_type_name_defaults_to_class_name(self):
        assert BadgePolicy.resource_type_name() == "Badge"


class TestScope:
    """Tests for the Scope base classes."""

    def test_default_scope_returns_nothing(self, admin: User):
        assert Scope(admin, [1, 2, 3]).resolve() == []

    def test_policy_with_scope_default(self, admin: User):
        assert PolicyWithScope.Scope(admin, [1, 2]).resolve() == []

    def test_scope_copies_context(self, admin: User):
        context = {"owner_id": 1}
        scope = Scope(admin, [], context)
        scope.context["owner_id"] = 2
        assert context == {"owner_id": 1}
