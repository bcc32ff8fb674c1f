"""Cat routes.

- POST /cats: validate → authorize (admin, write) → persist → notify
- GET /cats: list, requires a read-all token
- GET /cats/token: issue a bearer token
- GET /cats/{id}: placeholder echo
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from api.dependencies import (
    get_access_policy,
    get_cat_repo,
    get_notification_hub,
    get_settings,
    get_token_service,
    get_user_repo,
)
from api.models import CatResponse, TokenResponse
from api.security import get_access_request, http_error
from domain.model.access import AccessRequest
from domain.model.errors import DomainError
from port.cat_repository import CatRepository
from port.user_repository import UserRepository
from services import auth_service, cat_service
from services.access_policy import AccessPolicy
from services.notification_hub import NotificationHub
from services.token_service import TokenService
from utils.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cats", tags=["cats"])


@router.post("", response_model=CatResponse, status_code=status.HTTP_201_CREATED)
async def create_cat(
    payload: Any = Body(None),
    access: AccessRequest = Depends(get_access_request),
    repo: CatRepository = Depends(get_cat_repo),
    policy: AccessPolicy = Depends(get_access_policy),
    hub: NotificationHub = Depends(get_notification_hub),
    settings: Settings = Depends(get_settings),
):
    """Create a cat and broadcast a `created` event.

    Raises:
        HTTPException: 400 invalid payload, 401 missing/invalid token,
            403 role mismatch, 503 store failure
    """
    try:
        cat = await cat_service.create_cat(
            payload,
            access,
            repo=repo,
            policy=policy,
            notifier=hub,
            persist_timeout=settings.persist_timeout,
        )
    except DomainError as e:
        raise http_error(e) from e
    return CatResponse(**cat.to_dict())


@router.get("", response_model=list[CatResponse])
async def find_all(
    access: AccessRequest = Depends(get_access_request),
    repo: CatRepository = Depends(get_cat_repo),
    policy: AccessPolicy = Depends(get_access_policy),
):
    try:
        cats = await cat_service.list_cats(access, repo=repo, policy=policy)
    except DomainError as e:
        raise http_error(e) from e
    return [CatResponse(**cat.to_dict()) for cat in cats]


@router.get("/token", response_model=TokenResponse, response_model_by_alias=True)
async def create_token(
    email: Optional[str] = Query(None, description="Subject of the token; defaults to DEFAULT_TOKEN_SUBJECT"),
    users: Optional[UserRepository] = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    token, expires_in = auth_service.issue_token(email or settings.default_token_subject, users, tokens)
    return TokenResponse(access_token=token, expires_in=expires_in)


@router.get("/{cat_id}")
async def find_one(cat_id: str) -> str:
    return f"This action returns a #{cat_id} cat"
