from functools import lru_cache

from fastapi import Depends, HTTPException
from starlette.requests import HTTPConnection

from adapter.mongodb.cat_repository import MongoCatRepository
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.dog_repository import MongoDogRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.cat_repository import CatRepository
from port.dog_repository import DogRepository
from port.user_repository import UserRepository
from services.access_policy import AccessPolicy
from services.notification_hub import NotificationHub
from services.token_service import TokenService
from utils.config import Settings, load_settings


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def _get_db(settings: Settings = Depends(get_settings)):
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[settings.mongodb_database]


def get_cat_repo(db=Depends(_get_db)) -> CatRepository:
    return MongoCatRepository(db)


def get_dog_repo(db=Depends(_get_db)) -> DogRepository:
    return MongoDogRepository(db)


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository | None:
    """User store, or None when MongoDB is unavailable. Token issuing works without it."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        return None
    return MongoUserRepository(client[settings.mongodb_database])


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expires_in,
    )


def get_access_policy(tokens: TokenService = Depends(get_token_service)) -> AccessPolicy:
    return AccessPolicy(tokens)


def get_notification_hub(connection: HTTPConnection) -> NotificationHub:
    """Process-scoped hub created by the application lifespan."""
    return connection.app.state.hub
