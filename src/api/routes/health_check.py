from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.health import (
    CheckDatabaseUseCase,
    DatabaseHealthDetails,
    DatabaseHealthResponse,
)
from src.depends import get_unit_of_work
from src.domain.base import utcnow

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health():
    """Liveness check."""
    return {"status": "ok"}


@router.get("/db", response_model=DatabaseHealthResponse)
async def health_db(uow: UnitOfWork = Depends(get_unit_of_work)):
    """Database check: SELECT 1 round-trip plus account count."""
    use_case = CheckDatabaseUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        body = DatabaseHealthResponse(
            status="error",
            message=result.error.message,
            details=DatabaseHealthDetails(connected=False, timestamp=utcnow()),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json", exclude_none=True),
        )

    return result.value
