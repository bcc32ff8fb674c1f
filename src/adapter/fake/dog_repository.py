"""In-memory implementation of DogRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.dog import Dog


class FakeDogRepository:
    def __init__(self):
        self.store: dict[str, Dog] = {}

    def insert(self, dog: Dog) -> Dog:
        stored = replace(dog, id=dog.id or uuid.uuid4().hex)
        self.store[stored.id] = stored
        return stored

    def list_all(self) -> list[Dog]:
        return list(self.store.values())
