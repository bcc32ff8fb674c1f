"""Dog service: plain create/list over the document store. No auth, no notifications."""

import logging

import anyio.to_thread

from domain.model.dog import Dog
from port.dog_repository import DogRepository

logger = logging.getLogger(__name__)


async def create_dog(name: str, age: int, breed: str, repo: DogRepository) -> Dog:
    logger.info("Dog creation requested", extra={"dogName": name, "age": age, "breed": breed})
    dog = await anyio.to_thread.run_sync(repo.insert, Dog(name=name, age=age, breed=breed))
    logger.info("Dog created", extra={"dogId": dog.id})
    return dog


async def list_dogs(repo: DogRepository) -> list[Dog]:
    return await anyio.to_thread.run_sync(repo.list_all)
