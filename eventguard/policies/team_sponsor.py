"""Team sponsor policy."""

from __future__ import annotations

from eventguard.entities import TeamSponsor
from eventguard.policies.builtin import OpenPolicy


class TeamSponsorPolicy(OpenPolicy):
    """Sponsors are public records; every action is open to everyone."""

    CREATE = "TEAM_SPONSOR_CREATE"
    READ = "TEAM_SPONSOR_READ"
    UPDATE = "TEAM_SPONSOR_UPDATE"
    DELETE = "TEAM_SPONSOR_DELETE"

    action_prefix = "TEAM_SPONSOR"

    resource: TeamSponsor | None
