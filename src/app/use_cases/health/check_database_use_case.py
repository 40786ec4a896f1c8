"""
Check Database Use Case

Round-trips to the account store and reports latency and account count.
"""

import logging
import time
from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class DatabaseHealthDetails(BaseModel):
    connected: bool
    timestamp: datetime
    response_time_ms: Optional[float] = None
    user_count: Optional[int] = None


class DatabaseHealthResponse(BaseModel):
    status: str
    message: str
    details: DatabaseHealthDetails


class CheckDatabaseUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[DatabaseHealthResponse]:
        try:
            async with self.uow:
                start = time.perf_counter()
                await self.uow.ping()
                duration_ms = round((time.perf_counter() - start) * 1000, 2)

                user_count = await self.uow.users.count()
        except (SQLAlchemyError, OSError):
            logger.exception("Database connection check failed")
            return Return.err(Error("DEPENDENCY_ERROR", "Database connection failed"))

        return Return.ok(
            DatabaseHealthResponse(
                status="success",
                message="Database connection successful",
                details=DatabaseHealthDetails(
                    connected=True,
                    timestamp=utcnow(),
                    response_time_ms=duration_ms,
                    user_count=user_count,
                ),
            )
        )
