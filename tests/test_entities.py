"""Tests for entity helpers."""

from __future__ import annotations

from eventguard.entities import (
    Event,
    Participation,
    RegistrationStatus,
    Team,
    TeamRegistration,
    User,
    Visibility,
)


class TestPublicTeamRegistrations:
    """Tests for Event.public_team_registrations."""

    def test_lists_accepted_teams_of_public_event(self, event: Event):
        event.add_team_registration(
            TeamRegistration(team=Team(name="Knights"), registration_status=RegistrationStatus.ACCEPTED)
        )
        event.add_team_registration(
            TeamRegistration(team=Team(name="Rooks"), registration_status=RegistrationStatus.PENDING)
        )
        event.add_team_registration(
            TeamRegistration(team=Team(name="Pawns"), registration_status=RegistrationStatus.REFUSED)
        )

        assert event.public_team_registrations() == ["Knights"]

    def test_private_event_exposes_nothing(self, private_event: Event):
        private_event.add_team_registration(
            TeamRegistration(team=Team(name="Knights"), registration_status=RegistrationStatus.ACCEPTED)
        )
        assert private_event.participants_visibility is Visibility.PRIVATE
        assert private_event.public_team_registrations() == []


class TestRelationHelpers:
    """Tests for owning-side synchronisation."""

    def test_add_participation_sets_event(self):
        event = Event(id=1, creator=User(id=1))
        participation = event.add_participation(Participation(id=2))

        assert participation.event is event
        assert event.participations == [participation]

    def test_add_participation_twice_keeps_one(self):
        event = Event(id=1, creator=User(id=1))
        participation = Participation(id=2)
        event.add_participation(participation)
        event.add_participation(participation)

        assert len(event.participations) == 1

    def test_add_manager_links_both_sides(self):
        event = Event(id=1, creator=User(id=1))
        manager = event.add_manager(User(id=2))

        assert manager.event is event
        assert manager.user.id == 2

    def test_persistence_flag(self):
        assert not Event().is_persisted
        assert Event(id=3).is_persisted
        assert User(id=3).is_persisted

    def test_entities_compare_by_identity(self):
        assert User(id=1) != User(id=1)
        assert User(id=1).is_same(User(id=1))

    def test_user_repr_hides_relations(self):
        assert repr(User(id=1, email="a@example.com", roles=["ROLE_ADMIN"])) == (
            "User(id=1, email='a@example.com', roles=['ADMIN'])"
        )
