"""
Structured logging configuration

JSON log lines for log aggregation (Grafana/Loki), plain text otherwise.
Extra fields are passed through ``extra=``:
- context: dict of arbitrary key/values
- request: dict with method/path/request_id
- duration_ms: float
"""
import json
import logging
import sys
import time
import uuid
from datetime import UTC, datetime


class JSONFormatter(logging.Formatter):
    """JSON formatter tagging every record with service and environment"""

    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "environment": self.environment,
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        request = getattr(record, "request", None)
        if request:
            log_data["request"] = request

        if hasattr(record, "duration_ms"):
            log_data["performance"] = {"duration_ms": record.duration_ms}

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_data["error"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value),
                "stack": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


def setup_logging(
    log_level: str = "INFO",
    enable_json: bool = True,
    service: str = "swing-decoder-handicap-tracker",
    environment: str = "development",
):
    """
    Configure application logging

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json: Emit JSON lines instead of plain text
        service: Service name stamped on JSON records
        environment: Operating mode stamped on JSON records
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    if enable_json:
        console_handler.setFormatter(JSONFormatter(service, environment))
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    # Request logging middleware covers access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.info(f"Logging configured: level={log_level}, json={enable_json}")


async def log_requests_middleware(request, call_next):
    """Log each HTTP request with status and duration, and tag it with X-Request-ID"""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    request_info = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }

    logger = logging.getLogger("app.requests")
    logger.debug("API request received", extra={"request": request_info})

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.error(
            "API request failed",
            extra={"request": request_info, "duration_ms": duration_ms},
            exc_info=True,
        )
        raise

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    logger.info(
        "API request completed",
        extra={
            "request": request_info,
            "context": {"status_code": response.status_code},
            "duration_ms": duration_ms,
        },
    )
    response.headers["X-Request-ID"] = request_id
    return response
