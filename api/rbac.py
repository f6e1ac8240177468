"""Evidence Manager - Policy Guards
FastAPI dependencies enforcing a named policy on a route.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from api.dependencies import get_current_officer
from core.authorization import AuthorizationResult, Policy, authorize
from core.database import Officer
from core.responses import ResponseMessage


class PolicyGuard:
    """Dependency returning the caller when it satisfies the policy."""

    def __init__(self, policy: Policy):
        self.policy = policy

    async def __call__(
        self,
        current_officer: Optional[Officer] = Depends(get_current_officer),
    ) -> Officer:
        result = authorize(current_officer, self.policy)

        if result == AuthorizationResult.UNAUTHENTICATED:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=ResponseMessage.USER_IS_NOT_AUTHENTICATED,
                headers={"WWW-Authenticate": "Bearer"},
            )

        if result == AuthorizationResult.DENIED:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=ResponseMessage.FORBIDDEN,
            )

        return current_officer


def require_policy(policy: Policy) -> PolicyGuard:
    """Dependency factory for a policy."""
    return PolicyGuard(policy)


require_police_officer = require_policy(Policy.IS_POLICE_OFFICER)
require_administrator = require_policy(Policy.IS_ADMINISTRATOR)
