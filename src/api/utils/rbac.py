"""
Route guards

FastAPI dependencies that turn the RBAC resolver's results into 401/403.
"""

from typing import Optional

from fastapi import Depends, status

from src.api.error import ClientError
from src.app.services import rbac
from src.app.use_cases.auth.dtos import Identity
from src.depends import get_current_identity
from src.domain.entities import UserRole


async def require_auth(
    identity: Optional[Identity] = Depends(get_current_identity),
) -> Identity:
    result = rbac.require_auth(identity)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)
    return result.value


def require_role(required_role: UserRole):
    """
    Build a dependency that admits only identities holding required_role or higher.

    Raises:
        ClientError: 401 with no identity, 403 with an insufficient role
    """

    async def dependency(
        identity: Optional[Identity] = Depends(get_current_identity),
    ) -> Identity:
        result = rbac.require_role(identity, required_role)
        if result.is_err():
            status_code = (
                status.HTTP_401_UNAUTHORIZED
                if identity is None
                else status.HTTP_403_FORBIDDEN
            )
            raise ClientError(result.error, status_code=status_code)
        return result.value

    return dependency
