"""
Load Session User Use Case

Resolves the user behind a verified session credential.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork


class SessionUser(BaseModel):
    """Safe projection of a user, returned to the browser"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    name: str
    role: str
    created_at: datetime = Field(alias="createdAt")


class LoadSessionUserUseCase:
    """
    Use case for loading the signed-in user.

    Business Rules:
    - Credential has already been verified by the caller
    - A credential whose user no longer exists yields no user, not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[Optional[SessionUser]]:
        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return Return.ok(None)

        async with self.uow:
            user = await self.uow.users.get_by_id(parsed_id)
            if user is None:
                return Return.ok(None)

            return Return.ok(
                SessionUser(
                    id=str(user.id),
                    email=user.email,
                    name=user.name,
                    role=user.role.value if hasattr(user.role, "value") else str(user.role),
                    created_at=user.created_at,
                )
            )
