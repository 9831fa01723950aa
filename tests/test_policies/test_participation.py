"""Tests for the participation policy."""

from __future__ import annotations

import pytest

from eventguard import EventGuard
from eventguard.entities import Participation, User
from eventguard.exceptions import MissingRelationError
from eventguard.policies.participation import ParticipationPolicy


class TestOpenParticipationActions:
    """CREATE, READ and DELETE are open to any authenticated user."""

    @pytest.mark.parametrize(
        "action",
        [ParticipationPolicy.CREATE, ParticipationPolicy.READ, ParticipationPolicy.DELETE],
    )
    def test_any_user_allowed(
        self, guard: EventGuard, participation: Participation, basic_user: User, action: str
    ):
        assert guard.decide(action, participation, basic_user).allowed

    @pytest.mark.parametrize(
        "action",
        [ParticipationPolicy.CREATE, ParticipationPolicy.READ, ParticipationPolicy.DELETE],
    )
    def test_anonymous_denied(self, guard: EventGuard, participation: Participation, action: str):
        assert not guard.decide(action, participation, None).allowed

    def test_create_needs_no_event(self, guard: EventGuard, basic_user: User):
        assert guard.decide(ParticipationPolicy.CREATE, Participation(), basic_user).allowed


class TestParticipationUpdate:
    """UPDATE is delegated to the parent event's creator and managers."""

    def test_event_creator_can_update(
        self, guard: EventGuard, participation: Participation, organiser: User
    ):
        assert guard.decide(ParticipationPolicy.UPDATE, participation, organiser).allowed

    def test_event_manager_can_update(
        self, guard: EventGuard, participation: Participation, manager_user: User
    ):
        assert guard.decide(ParticipationPolicy.UPDATE, participation, manager_user).allowed

    def test_unrelated_user_cannot_update(
        self, guard: EventGuard, participation: Participation, basic_user: User
    ):
        assert not guard.decide(ParticipationPolicy.UPDATE, participation, basic_user).allowed

    def test_admin_unrelated_to_event_cannot_update(
        self, guard: EventGuard, participation: Participation, admin: User
    ):
        assert not guard.decide(ParticipationPolicy.UPDATE, participation, admin).allowed

    def test_user_who_created_participation_is_not_enough(
        self, guard: EventGuard, participation: Participation, basic_user: User
    ):
        # Participations have no owner: having posted it grants nothing
        assert guard.decide(ParticipationPolicy.CREATE, participation, basic_user).allowed
        assert not guard.decide(ParticipationPolicy.UPDATE, participation, basic_user).allowed

    def test_participation_without_event_is_integrity_fault(
        self, guard: EventGuard, organiser: User
    ):
        with pytest.raises(MissingRelationError):
            guard.decide(ParticipationPolicy.UPDATE, Participation(id=21), organiser)
