"""
List Users Use Case

Admin listing of every account. Callers gate this behind the ADMIN role.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return


class UserSummary(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
    email_verified: Optional[datetime] = None
    created_at: datetime


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[UserSummary]]:
        """Newest accounts first; password hashes never leave this layer"""
        async with self.uow:
            users = await self.uow.users.list_all()

            return Return.ok(
                [
                    UserSummary(
                        id=str(user.id),
                        email=user.email,
                        name=user.name,
                        role=user.role.value,
                        email_verified=user.email_verified,
                        created_at=user.created_at,
                    )
                    for user in users
                ]
            )
