"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, name: str, role: str | None = None) -> User | None:
        if any(u.email == email for u in self.store.values()):
            return None

        user = User(
            id=uuid.uuid4().hex,
            email=email,
            name=name,
            created_at=datetime.now(timezone.utc),
            role=role,
        )
        self.store[user.id] = user
        return user

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
