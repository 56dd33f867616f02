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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./finance_auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    JWT_ACCESS_SECRET = data.get("JWT_ACCESS_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_ISSUER = data.get("ACCESS_TOKEN_ISSUER", "finance-manager-auth")
    ACCESS_TOKEN_AUDIENCE = data.get("ACCESS_TOKEN_AUDIENCE", "finance-manager-dashboard")
    ACCESS_TOKEN_TTL_SECONDS = data.get("ACCESS_TOKEN_TTL_SECONDS", 900)
    REFRESH_TOKEN_TTL_SECONDS = data.get("REFRESH_TOKEN_TTL_SECONDS", 30 * 24 * 60 * 60)
    EMAIL_VERIFICATION_TOKEN_TTL_HOURS = data.get("EMAIL_VERIFICATION_TOKEN_TTL_HOURS", 24)
    PASSWORD_RESET_TOKEN_TTL_MINUTES = data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 30)

    ACCESS_COOKIE_NAME = data.get("ACCESS_COOKIE_NAME", "fm_access")
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "fm_refresh")
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))
    COOKIE_DOMAIN = data.get("COOKIE_DOMAIN", None)
