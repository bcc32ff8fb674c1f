from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user. Created out-of-band, read-only to the API."""
    id: str
    email: str
    name: str
    created_at: datetime
    role: str | None = None
    password_hash: str | None = None
