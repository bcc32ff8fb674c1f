from dataclasses import dataclass

NAME_MAX_LENGTH = 4

# Ages must fit a signed 64-bit document integer
AGE_MIN = -(2 ** 63)
AGE_MAX = 2 ** 63 - 1


@dataclass
class Cat:
    """Domain model representing a cat. `id` is assigned by the store on insert."""
    name: str
    age: int
    breed: str
    id: int | None = None

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'age': self.age, 'breed': self.breed}
