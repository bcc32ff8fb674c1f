"""Port definition for CatRepository."""

from typing import Protocol

from domain.model.cat import Cat


class CatRepository(Protocol):
    def insert(self, cat: Cat) -> Cat:
        """Persist a validated cat, assigning an id if absent. Raise PersistenceError on failure."""
        ...

    def list_all(self) -> list[Cat]:
        """Return a fresh snapshot of all stored cats. Raise PersistenceError on failure."""
        ...
