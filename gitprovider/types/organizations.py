"""Organization-related info types."""

from dataclasses import dataclass, field


@dataclass
class OrganizationInfo:
    """A top-level organization or a sub-organization."""

    # Human-friendly name, e.g. "Flux" or "Kubernetes SIGs".
    name: str | None = None
    description: str | None = None


@dataclass
class TeamInfo:
    """A team of users inside an organization."""

    # May contain slashes.
    name: str
    # Logins of the team members.
    members: list[str] = field(default_factory=list)
