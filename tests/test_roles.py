"""Tests for the role model and its hierarchy."""

from __future__ import annotations

import pytest

from eventguard.entities import User
from eventguard.roles import ROLE_HIERARCHY, Role, has_at_least, reachable_roles


class TestRoleParsing:
    """Tests for Role.parse."""

    @pytest.mark.parametrize(
        "value",
        [Role.ORGANISER, "ORGANISER", "organiser", "ROLE_ORGANISER", " role_organiser "],
    )
    def test_accepted_spellings(self, value):
        assert Role.parse(value) is Role.ORGANISER

    def test_unknown_role_raises(self):
        with pytest.raises(ValueError, match="Unknown role"):
            Role.parse("ROLE_SUPERUSER")

    def test_str_is_framework_name(self):
        assert str(Role.ADMIN) == "ROLE_ADMIN"


class TestHierarchy:
    """Tests for the implication table."""

    def test_every_role_implies_itself(self):
        for role, implied in ROLE_HIERARCHY.items():
            assert role in implied

    def test_admin_reaches_everything(self):
        assert reachable_roles([Role.ADMIN]) == {Role.ADMIN, Role.ORGANISER, Role.USER}

    def test_organiser_does_not_reach_admin(self):
        assert Role.ADMIN not in reachable_roles(["ROLE_ORGANISER"])

    def test_empty_role_set(self):
        assert reachable_roles([]) == frozenset()

    @pytest.mark.parametrize(
        ("held", "required", "expected"),
        [
            ([Role.ADMIN], Role.ORGANISER, True),
            ([Role.ADMIN], Role.USER, True),
            ([Role.ORGANISER], Role.USER, True),
            ([Role.ORGANISER], Role.ADMIN, False),
            ([Role.USER], Role.ORGANISER, False),
        ],
    )
    def test_has_at_least(self, held, required, expected):
        assert has_at_least(held, required) is expected


class TestUserRoles:
    """Tests for role checks on the principal."""

    def test_roles_normalised_from_strings(self):
        user = User(id=1, roles=["ROLE_ADMIN", "organiser"])
        assert user.roles == {Role.ADMIN, Role.ORGANISER}

    def test_every_user_holds_user_role(self):
        user = User(id=1)
        assert user.get_roles() == {Role.USER}
        assert user.has_role(Role.USER)

    def test_has_role_ignores_hierarchy(self):
        admin = User(id=1, roles=[Role.ADMIN])
        assert admin.has_role(Role.ADMIN)
        assert not admin.has_role(Role.ORGANISER)

    def test_has_at_least_follows_hierarchy(self):
        admin = User(id=1, roles=[Role.ADMIN])
        assert admin.has_at_least(Role.ORGANISER)
        assert admin.has_at_least("ROLE_USER")

    def test_invalid_role_rejected_at_construction(self):
        with pytest.raises(ValueError):
            User(id=1, roles=["ROLE_ROOT"])
