"""Access-control value objects shared by the token service and the access policy."""

from dataclasses import dataclass
from datetime import datetime

READ_ALL = 'read-all'
WRITE = 'write'
ADMIN_ROLE = 'admin'


@dataclass(frozen=True)
class AccessToken:
    """Decoded bearer token claims."""
    subject: str
    issued_at: datetime
    expires_in: int
    role: str | None = None


@dataclass(frozen=True)
class AccessRequest:
    """What an inbound request presents: an optional bearer token and role claim."""
    token: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class RouteRequirement:
    """What a route demands. A capability or a role implies a valid token."""
    capability: str | None = None
    role: str | None = None

    @property
    def requires_token(self) -> bool:
        return self.capability is not None or self.role is not None


@dataclass(frozen=True)
class Principal:
    """An authorized caller."""
    subject: str
    role: str | None = None


PUBLIC = RouteRequirement()
LIST_CATS = RouteRequirement(capability=READ_ALL)
CREATE_CAT = RouteRequirement(capability=WRITE, role=ADMIN_ROLE)
