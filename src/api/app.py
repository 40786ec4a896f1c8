import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from src.adapter.notifiers.logging_notifier import LoggingPasswordResetNotifier
from src.adapter.services.golf_course_api_client import GolfCourseApiClient
from src.app.use_cases.auth import PasswordResetSettings
from src.depends import create_engine, create_session_factory
from src.logging_config import log_requests_middleware, setup_logging
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    message = exc.base_error.message if exc.expose_message else "Internal server error"
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    logger.warning(f"Request validation failed: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {"code": "VALIDATION_ERROR", "message": "Validation error", "details": details}
        },
    )


def create_app(ApplicationConfig) -> FastAPI:
    setup_logging(
        log_level=ApplicationConfig.LOG_LEVEL,
        enable_json=ApplicationConfig.LOG_JSON,
        service=ApplicationConfig.SERVICE_NAME,
        environment=ApplicationConfig.ENVIRONMENT,
    )

    engine = create_engine(ApplicationConfig.DB_URI)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await engine.dispose()

    app = FastAPI(title="Swing Decoder API", version="0.1.0", lifespan=lifespan)

    app.state.session_factory = create_session_factory(engine)
    app.state.password_reset_settings = PasswordResetSettings.from_config(ApplicationConfig)
    app.state.password_reset_notifier = LoggingPasswordResetNotifier()
    app.state.golf_course_client = None
    if ApplicationConfig.GOLF_COURSE_API_KEY:
        app.state.golf_course_client = GolfCourseApiClient(
            base_url=ApplicationConfig.GOLF_COURSE_API_BASE,
            api_key=ApplicationConfig.GOLF_COURSE_API_KEY,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests_middleware)

    from src.api.routes import auth, golf_courses, health_check

    app.include_router(health_check.router, prefix=ApplicationConfig.API_PREFIX, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(
        golf_courses.router, prefix=ApplicationConfig.API_PREFIX, tags=["Golf Courses"]
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    if ApplicationConfig.ENVIRONMENT == "development":
        logger.warning("Development mode: password reset links are returned in responses")

    return app
