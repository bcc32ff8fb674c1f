from dataclasses import dataclass


@dataclass
class Dog:
    """Domain model representing a dog stored in the document store."""
    name: str
    age: int
    breed: str
    id: str | None = None
