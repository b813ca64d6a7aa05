from typing import List

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.rbac import require_role
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import ListUsersUseCase, UserSummary
from src.depends import get_unit_of_work
from src.domain.entities import UserRole

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/users",
    status_code=status.HTTP_200_OK,
    response_model=List[UserSummary],
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def list_users(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    List Users (ADMIN only)

    Raises:
        - 401 Unauthorized: No valid bearer token
        - 403 Forbidden: Caller is not an admin
    """
    use_case = ListUsersUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
