"""Dog routes. Unauthenticated create/list over the document store."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_dog_repo
from api.models import DogCreate, DogResponse
from api.security import http_error
from domain.model.errors import DomainError
from port.dog_repository import DogRepository
from services import dog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dog", tags=["dogs"])


@router.post("", response_model=DogResponse, status_code=status.HTTP_201_CREATED)
async def create_dog(request: DogCreate, repo: DogRepository = Depends(get_dog_repo)):
    try:
        dog = await dog_service.create_dog(request.name, request.age, request.breed, repo=repo)
    except DomainError as e:
        raise http_error(e) from e
    return DogResponse(id=dog.id, name=dog.name, age=dog.age, breed=dog.breed)


@router.get("", response_model=list[DogResponse])
async def find_all(repo: DogRepository = Depends(get_dog_repo)):
    try:
        dogs = await dog_service.list_dogs(repo)
    except DomainError as e:
        raise http_error(e) from e
    return [DogResponse(id=d.id, name=d.name, age=d.age, breed=d.breed) for d in dogs]
