"""Auth service: token issuing for known or anonymous subjects.

Pure business logic with no HTTP dependencies.
"""

import logging

from domain.model.errors import PersistenceError
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)


def issue_token(email: str, users: UserRepository | None, tokens: TokenService) -> tuple[str, int]:
    """Issue a bearer token for `email`.

    A known user's stored role is embedded as the `role` claim. Unknown emails
    still get a token, without a role. When the user store is unavailable
    (`users` is None or the lookup fails) the token is issued without a role.
    """
    user = None
    if users is None:
        logger.warning("User store unavailable, issuing token without role", extra={"subject": email})
    else:
        try:
            user = users.get_by_email(email)
        except PersistenceError as e:
            logger.warning("User lookup failed, issuing token without role", extra={"subject": email, "error": str(e)})

    role = user.role if user else None
    token, expires_in = tokens.issue(email, role=role)
    logger.info("Token issued", extra={"subject": email, "role": role, "knownUser": user is not None})
    return token, expires_in
