"""Per-request access decisions.

Checks run in a fixed order, role guard first and token guard second, and
every check must pass. The first failing check decides the outcome.
"""

import logging
from typing import Callable

from domain.model.access import AccessRequest, AccessToken, Principal, RouteRequirement
from domain.model.errors import ForbiddenError, InvalidTokenError, UnauthorizedError
from services.token_service import TokenService

logger = logging.getLogger(__name__)

# A check raises to deny, and may return the token it verified
Check = Callable[[AccessRequest, RouteRequirement], AccessToken | None]


class AccessPolicy:
    def __init__(self, tokens: TokenService):
        self._tokens = tokens
        self.checks: list[Check] = [self.role_guard, self.token_guard]

    def authorize(self, request: AccessRequest, requirement: RouteRequirement) -> Principal | None:
        """Run every check in order.

        Returns the authenticated Principal, or None for a public route called
        without a token.

        Raises:
            ForbiddenError: role claim does not match the declared role
            UnauthorizedError: token missing or invalid where one is required
        """
        token = None
        for check in self.checks:
            token = check(request, requirement) or token

        if token is None:
            if request.token is None:
                return None
            try:
                token = self._tokens.decode(request.token)
            except InvalidTokenError:
                # Public route with a stale token: treat as anonymous
                return None
        return Principal(subject=token.subject, role=token.role)

    def role_guard(self, request: AccessRequest, requirement: RouteRequirement) -> None:
        if requirement.role is None:
            return None
        if request.role != requirement.role:
            logger.info("Role guard denied request", extra={"requiredRole": requirement.role, "role": request.role})
            raise ForbiddenError(f"Role '{requirement.role}' required")

    def token_guard(self, request: AccessRequest, requirement: RouteRequirement) -> AccessToken | None:
        if not requirement.requires_token:
            return None
        if not request.token:
            raise UnauthorizedError("Not authenticated")
        try:
            return self._tokens.decode(request.token)
        except InvalidTokenError as e:
            raise UnauthorizedError("Invalid authentication credentials") from e

    def role_claim(self, token: str | None) -> str | None:
        """Role carried by a verifiable token, None otherwise."""
        if not token:
            return None
        try:
            return self._tokens.decode(token).role
        except InvalidTokenError:
            return None
