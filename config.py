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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    APP_URL = data.get("APP_URL", "http://localhost:3000")
    VERIFICATION_TOKEN_TTL_HOURS = data.get("VERIFICATION_TOKEN_TTL_HOURS", 24)
    PASSWORD_RESET_TOKEN_TTL_HOURS = data.get("PASSWORD_RESET_TOKEN_TTL_HOURS", 1)
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    MAIL_BACKEND = data.get("MAIL_BACKEND", "console")
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_FROM = data.get("SMTP_FROM", "noreply@example.com")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", 1))
    AUDIT_BACKEND = data.get("AUDIT_BACKEND", "database")
    RATE_LIMITS = data.get("RATE_LIMITS", {})
