import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./session.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_DEFAULT_TTL_MINUTES = int(data.get("SESSION_DEFAULT_TTL_MINUTES", 60 * 24))
    SESSION_RETENTION_DAYS = int(data.get("SESSION_RETENTION_DAYS", 30))
    SESSION_PAGE_SIZE = int(data.get("SESSION_PAGE_SIZE", 20))
    ADMIN_ROLES = data.get("ADMIN_ROLES", ["ADMIN", "ROLE_ADMIN"])
