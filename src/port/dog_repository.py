"""Port definition for DogRepository."""

from typing import Protocol

from domain.model.dog import Dog


class DogRepository(Protocol):
    def insert(self, dog: Dog) -> Dog: ...

    def list_all(self) -> list[Dog]: ...
