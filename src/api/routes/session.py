from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ServerError
from src.api.utils.jwt import CredentialPayload
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.session import LoadSessionUserUseCase, SessionUser
from src.depends import get_optional_credential, get_unit_of_work

router = APIRouter(prefix="/session", tags=["Session"])


class MeResponse(BaseModel):
    """GET /session/me response payload"""

    user: Optional[SessionUser] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    credential: Optional[CredentialPayload] = Depends(get_optional_credential),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Session User

    Returns the signed-in user, or {"user": null} when there is no valid
    session cookie. Never echoes the credential itself.
    """
    if credential is None:
        return MeResponse(user=None)

    use_case = LoadSessionUserUseCase(uow)
    result = await use_case.execute(credential.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return MeResponse(user=result.value)
