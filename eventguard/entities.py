"""
Entity shapes inspected by the policies.

These mirror what the persistence layer loads for an event-management
backend: users, events and the records hanging off them. The guard
never creates or stores them; it only reads relations that were
resolved before a decision is requested. Entities compare by identity
because their relations are cyclic (event -> manager -> event).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from eventguard.roles import Role, has_at_least


class Visibility(Enum):
    """Whether an event publishes its participant list."""

    PUBLIC = "Public"
    PRIVATE = "Private"


class RegistrationStatus(Enum):
    """Lifecycle of a team registration."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REFUSED = "Refused"


@dataclass(eq=False)
class User:
    """
    An account, acting either as the principal or as a resource.

    Attributes:
        id: Database identifier, None until persisted.
        email: Login identifier.
        roles: Roles granted to the account. Strings such as
            "ROLE_ORGANISER" are normalised to Role members.
        created_events: Events this account created.
        rewards: Rewards this account manages.
    """

    id: int | None = None
    email: str | None = None
    roles: frozenset[Role] = field(default_factory=frozenset)
    created_events: list[Event] = field(default_factory=list)
    rewards: list[Reward] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.roles = frozenset(Role.parse(role) for role in self.roles)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def get_roles(self) -> frozenset[Role]:
        """Granted roles; every account holds USER."""
        return self.roles | {Role.USER}

    def has_role(self, role: Role | str) -> bool:
        """Check for an explicitly granted role, ignoring the hierarchy."""
        return Role.parse(role) in self.get_roles()

    def has_at_least(self, role: Role | str) -> bool:
        """Check for `role` or any role that implies it."""
        return has_at_least(self.get_roles(), role)

    def is_same(self, other: object) -> bool:
        """Identity check used by ownership rules."""
        if not isinstance(other, User):
            return False
        if self is other:
            return True
        return self.id is not None and self.id == other.id

    def __repr__(self) -> str:
        roles = sorted(role.name for role in self.roles)
        return f"User(id={self.id!r}, email={self.email!r}, roles={roles})"


@dataclass(eq=False)
class Game:
    id: int | None = None
    name: str | None = None


@dataclass(eq=False)
class Team:
    id: int | None = None
    name: str | None = None


@dataclass(eq=False)
class TeamSponsor:
    id: int | None = None
    name: str | None = None
    team: Team | None = None


@dataclass(eq=False)
class Manager:
    """Grants a user elevated control over one event."""

    id: int | None = None
    user: User | None = None
    event: Event | None = None


@dataclass(eq=False)
class Participation:
    """A game played within an event. Has no owner of its own."""

    id: int | None = None
    event: Event | None = None
    game: Game | None = None
    round: int | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(eq=False)
class TeamRegistration:
    id: int | None = None
    event: Event | None = None
    team: Team | None = None
    registration_status: RegistrationStatus = RegistrationStatus.PENDING

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(eq=False)
class Register:
    """A user's personal sign-up to an event."""

    id: int | None = None
    user: User | None = None
    event: Event | None = None


@dataclass(eq=False)
class Reward:
    """
    A prize offered at events.

    `manager` is the single user administering the reward. It may be
    unset, in which case nobody can update the reward until one is
    assigned.
    """

    id: int | None = None
    name: str | None = None
    description: str | None = None
    reward_type: str | None = None
    manager: User | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(eq=False)
class Event:
    """
    An event and the records attached to it.

    `creator` is assigned once, at creation, to the creating principal
    and is required for every persisted event. `managers` may be empty.
    """

    id: int | None = None
    name: str | None = None
    creator: User | None = None
    managers: list[Manager] = field(default_factory=list)
    participants_visibility: Visibility = Visibility.PUBLIC
    status: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    description: str | None = None
    official: bool = False
    charity: bool = False
    address: str | None = None
    max_participants: int | None = None
    price: int | None = None
    team_registrations: list[TeamRegistration] = field(default_factory=list)
    participations: list[Participation] = field(default_factory=list)
    registers: list[Register] = field(default_factory=list)
    rewards: list[Reward] = field(default_factory=list)
    sponsors: list[TeamSponsor] = field(default_factory=list)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def add_manager(self, user: User) -> Manager:
        for manager in self.managers:
            if manager.user is not None and manager.user.is_same(user):
                return manager
        manager = Manager(user=user, event=self)
        self.managers.append(manager)
        return manager

    def add_participation(self, participation: Participation) -> Participation:
        if participation not in self.participations:
            self.participations.append(participation)
        participation.event = self
        return participation

    def add_team_registration(self, registration: TeamRegistration) -> TeamRegistration:
        if registration not in self.team_registrations:
            self.team_registrations.append(registration)
        registration.event = self
        return registration

    def public_team_registrations(self) -> list[str]:
        """
        Names of accepted teams, exposed only for public events.

        Private events return an empty list whatever their registrations.
        """
        if self.participants_visibility is not Visibility.PUBLIC:
            return []
        return [
            registration.team.name
            for registration in self.team_registrations
            if registration.registration_status is RegistrationStatus.ACCEPTED
            and registration.team is not None
            and registration.team.name is not None
        ]

    def __repr__(self) -> str:
        creator_id = self.creator.id if self.creator is not None else None
        return f"Event(id={self.id!r}, name={self.name!r}, creator_id={creator_id!r})"
