"""
Use Case: Purge Stale Login Sessions

Deletes login sessions whose login window closed more than a grace
period ago. Expiry is already enforced lazily on every access, so this is
housekeeping only.
"""

import logging
from datetime import datetime, timedelta
from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PurgeLoginSessionsResponse(BaseModel):
    """Response DTO for PurgeLoginSessionsUseCase"""

    status: str
    purged: int


class PurgeLoginSessionsUseCase:
    """
    Purge stale login sessions.

    Business Logic:
    1. Compute cutoff = now - grace period
    2. Delete every session with expires_at before the cutoff,
       whatever its status
    3. Return the number of deleted rows
    """

    def __init__(self, uow: UnitOfWork, grace_period: timedelta = timedelta(hours=1)):
        self.uow = uow
        self.grace_period = grace_period

    async def execute(self) -> Result[PurgeLoginSessionsResponse]:
        cutoff = datetime.utcnow() - self.grace_period

        async with self.uow:
            purged = await self.uow.login_sessions.delete_stale(cutoff)
            await self.uow.commit()

        logger.info(f"Purged {purged} login sessions expired before {cutoff.isoformat()}")
        return Return.ok(PurgeLoginSessionsResponse(status="purged", purged=purged))
