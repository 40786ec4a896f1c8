import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./dev.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOG_JSON = bool(data.get("LOG_JSON", True))
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    SERVICE_NAME = data.get("SERVICE_NAME", "swing-decoder-handicap-tracker")
    ENVIRONMENT = data.get("ENVIRONMENT", "production")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    GOLF_COURSE_API_BASE = data.get("GOLF_COURSE_API_BASE", "https://api.golfcourseapi.com/v1")
    GOLF_COURSE_API_KEY = data.get("GOLF_COURSE_API_KEY", "")
