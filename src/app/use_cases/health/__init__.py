from .check_database_use_case import (
    CheckDatabaseUseCase,
    DatabaseHealthDetails,
    DatabaseHealthResponse,
)

__all__ = ["CheckDatabaseUseCase", "DatabaseHealthDetails", "DatabaseHealthResponse"]
