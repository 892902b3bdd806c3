"""
Admin API Routes - Housekeeping Endpoints

Authentication is via Admin API Key, not the session cookie.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    PurgeLoginSessionsResponse,
    PurgeLoginSessionsUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/login-sessions/purge",
    status_code=status.HTTP_200_OK,
    response_model=PurgeLoginSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_login_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge Stale Login Sessions

    Deletes login sessions whose login window closed over an hour ago.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = PurgeLoginSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
