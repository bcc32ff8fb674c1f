"""Cat service: authenticated create-and-notify flow.

API-side flow: validate → authorize → persist → notify → return

Each step either completes or raises before the next one starts. A failed
persist never notifies. A failed notification never fails the write.
"""

import logging
from typing import Any

import anyio
import anyio.to_thread
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from domain.model.access import CREATE_CAT, LIST_CATS, AccessRequest
from domain.model.cat import AGE_MAX, AGE_MIN, NAME_MAX_LENGTH, Cat
from domain.model.errors import PersistenceError, ValidationError
from port.cat_repository import CatRepository
from port.subscriber import Notifier
from services.access_policy import AccessPolicy

logger = logging.getLogger(__name__)

CAT_CREATED_EVENT = "created"


class CatInput(BaseModel):
    """Accepted shape of a new cat."""
    model_config = ConfigDict(extra='ignore')

    name: StrictStr = Field(..., min_length=0, max_length=NAME_MAX_LENGTH)
    age: StrictInt = Field(..., ge=AGE_MIN, le=AGE_MAX)
    breed: StrictStr


def validate_cat(payload: Any) -> Cat:
    """Validate a raw payload into an unsaved Cat.

    Raises:
        ValidationError: payload is not an object, or a field is missing or out of bounds
    """
    try:
        data = CatInput.model_validate(payload)
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError("Invalid cat payload", errors) from e
    return Cat(name=data.name, age=data.age, breed=data.breed)


async def create_cat(
    payload: Any,
    access: AccessRequest,
    repo: CatRepository,
    policy: AccessPolicy,
    notifier: Notifier,
    persist_timeout: float | None = None,
) -> Cat:
    """Create a cat and announce it to connected subscribers.

    Returns the stored Cat (with id set).
    Raises ValidationError, UnauthorizedError, ForbiddenError or PersistenceError.
    """
    cat = validate_cat(payload)
    principal = policy.authorize(access, CREATE_CAT)

    stored = await _persist(repo, cat, persist_timeout)
    logger.info("Cat created", extra={"catId": stored.id, "subject": principal.subject if principal else None})

    _notify(notifier, stored)
    return stored


async def list_cats(access: AccessRequest, repo: CatRepository, policy: AccessPolicy) -> list[Cat]:
    """Return every stored cat to a caller holding a read-all token."""
    policy.authorize(access, LIST_CATS)
    return await anyio.to_thread.run_sync(repo.list_all)


async def _persist(repo: CatRepository, cat: Cat, timeout: float | None) -> Cat:
    """Insert off the event loop. Timeout surfaces as PersistenceError.

    On timeout the worker thread is abandoned, not killed: the insert may still
    land, but the caller sees a failure and no notification is sent.
    """
    try:
        with anyio.fail_after(timeout):
            return await anyio.to_thread.run_sync(repo.insert, cat, abandon_on_cancel=True)
    except TimeoutError as e:
        logger.error("Cat insert timed out", extra={"timeout": timeout})
        raise PersistenceError("Timed out persisting cat") from e


def _notify(notifier: Notifier, cat: Cat) -> None:
    try:
        notifier.publish(CAT_CREATED_EVENT, cat.to_dict())
    except Exception as e:
        logger.warning("Failed to schedule cat notification", extra={"catId": cat.id, "error": str(e)})
